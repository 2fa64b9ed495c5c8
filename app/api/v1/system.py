# app/api/v1/system.py

import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.database import get_db
from app.core.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check():
    """서비스 헬스체크"""
    return {"status": "healthy", "service": get_settings().app_name}


@router.get("/db-test")
def test_db(db: Session = Depends(get_db)):
    """데이터베이스 연결 테스트"""
    try:
        result = db.execute(text("SELECT 1"))
        return {"status": "DB 연결 성공!", "result": result.scalar_one()}
    except SQLAlchemyError as e:
        logger.error("DB 연결 테스트 실패: %s", e)
        raise HTTPException(status_code=500, detail=f"DB 연결 실패: {str(e)}")
