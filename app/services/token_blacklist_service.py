# app/services/token_blacklist_service.py

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenBlacklist:
    """로그아웃된 토큰 목록 (토큰 -> 만료 시각)

    만료 시각이 지난 토큰은 더 이상 차단할 필요가 없으므로 조회 시 또는 정리 작업 시 제거된다.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock
        self._entries: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def add(self, token: str, expires_at: datetime) -> None:
        logger.info("토큰 블랙리스트 등록 (만료: %s)", expires_at.isoformat())
        with self._lock:
            self._entries[token] = expires_at

    def contains(self, token: str) -> bool:
        with self._lock:
            expires_at = self._entries.get(token)
            if expires_at is None:
                return False
            if self.clock() > expires_at:
                del self._entries[token]
                logger.debug("만료된 토큰을 블랙리스트에서 제거")
                return False
            return True

    def sweep(self) -> int:
        """만료된 토큰 정리 후 제거된 개수 반환"""
        now = self.clock()
        with self._lock:
            expired = [token for token, expires_at in self._entries.items() if expires_at < now]
            for token in expired:
                del self._entries[token]
            remaining = len(self._entries)

        if expired:
            logger.info("만료 토큰 %d개 정리, 남은 블랙리스트 %d개", len(expired), remaining)
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


token_blacklist = TokenBlacklist()


def get_token_blacklist() -> TokenBlacklist:
    return token_blacklist
