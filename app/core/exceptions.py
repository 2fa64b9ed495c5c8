# app/core/exceptions.py

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FilmExplorerException(Exception):
    """애플리케이션 기본 예외"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BadRequestException(FilmExplorerException):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(FilmExplorerException):
    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedException(FilmExplorerException):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictException(FilmExplorerException):
    status_code = status.HTTP_409_CONFLICT


async def film_explorer_exception_handler(request: Request, exc: FilmExplorerException):
    """도메인 예외를 JSON 응답으로 변환"""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info(
        "요청 처리 실패 (%d): %s",
        exc.status_code,
        exc.detail,
        extra={"request_id": request_id},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "detail": exc.detail, "request_id": request_id},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외: 로그를 남기고 내부 정보는 숨김"""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(
        "처리되지 않은 예외 발생",
        extra={"request_id": request_id},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "알 수 없는 오류가 발생했습니다",
            "request_id": request_id,
        },
    )
