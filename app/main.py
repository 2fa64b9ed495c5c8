# app/main.py

import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.exceptions import (
    FilmExplorerException,
    film_explorer_exception_handler,
    global_exception_handler,
)
from app.core.logging_config import setup_logging
from app.core.middleware import RequestTrackingMiddleware
from app.api.v1 import api_router
from app.database import engine, Base
from app.services.scheduler_service import SchedulerService
from app.services.token_blacklist_service import token_blacklist

# 설정 로드
settings = get_settings()

setup_logging(level=settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

# 스케줄러 전역 변수
scheduler_task = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 시작 시
    global scheduler_task
    Base.metadata.create_all(bind=engine)

    scheduler_service = SchedulerService(
        token_blacklist, interval_seconds=settings.blacklist_sweep_interval_seconds
    )
    scheduler_task = asyncio.create_task(scheduler_service.run_scheduler())
    logger.info("%s 시작", settings.app_name)

    yield

    # 종료 시
    if scheduler_task:
        scheduler_task.cancel()
        try:
            await scheduler_task
        except asyncio.CancelledError:
            pass
    logger.info("토큰 정리 스케줄러 종료됨")


# FastAPI 앱 생성
app = FastAPI(
    title=settings.app_name,
    description="Movie catalog, search and social tracking service",
    version="1.0.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
    debug=settings.debug,
    lifespan=lifespan,
)

# 예외 처리기
app.add_exception_handler(FilmExplorerException, film_explorer_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# 요청 추적 미들웨어
app.add_middleware(RequestTrackingMiddleware)

# CORS 미들웨어
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API v1 라우터 등록
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """서비스 루트"""
    return {
        "service": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }
