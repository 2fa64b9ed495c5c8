# app/services/scheduler_service.py

import asyncio
import logging
from app.services.token_blacklist_service import TokenBlacklist

logger = logging.getLogger(__name__)


class SchedulerService:

    def __init__(self, blacklist: TokenBlacklist, interval_seconds: int = 3600):
        self.blacklist = blacklist
        self.interval_seconds = interval_seconds

    def sweep_expired_tokens(self) -> int:
        """만료 토큰 정리"""
        try:
            return self.blacklist.sweep()
        except Exception:
            logger.exception("토큰 블랙리스트 정리 실패")
            return 0

    async def run_scheduler(self):
        """스케줄러 실행 (취소될 때까지 주기적으로 정리)"""
        logger.info("토큰 정리 스케줄러 시작 (주기: %d초)", self.interval_seconds)
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.sweep_expired_tokens()
