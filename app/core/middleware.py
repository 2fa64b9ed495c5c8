# app/core/middleware.py

import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """요청 ID 부여 및 처리 시간 기록"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            process_time = (time.perf_counter() - start_time) * 1000
            logger.error(
                "요청 실패: %s %s (%.2fms)",
                request.method,
                request.url.path,
                process_time,
                extra={"request_id": request_id},
                exc_info=True,
            )
            raise

        process_time = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.2f}"

        logger.info(
            "요청 완료: %s %s -> %d (%.2fms)",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
            extra={"request_id": request_id},
        )
        return response
