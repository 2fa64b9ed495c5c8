# app/core/dependencies.py

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import User
from app.services.user_service import UserService
from app.services.token_blacklist_service import TokenBlacklist, get_token_blacklist
from app.core.auth import decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_service: UserService = Depends(get_user_service),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> User:
    """현재 로그인한 사용자 조회"""
    if not credentials:
        raise _unauthorized("토큰이 필요합니다")

    token = credentials.credentials
    if blacklist.contains(token):
        logger.info("로그아웃된 토큰으로 접근 시도")
        raise _unauthorized("로그아웃된 토큰입니다")

    payload = decode_access_token(token)
    if not payload:
        raise _unauthorized("유효하지 않은 토큰입니다")

    user = await user_service.get_user_by_email(payload["sub"])
    if not user or not user.is_active:
        raise _unauthorized("사용자를 찾을 수 없습니다")

    return user


async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_service: UserService = Depends(get_user_service),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> Optional[User]:
    """현재 로그인한 사용자 조회 None 허용"""
    if not credentials:
        return None

    try:
        return await get_current_user(credentials, user_service, blacklist)
    except HTTPException:
        return None


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """관리자 권한 확인"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="관리자 권한이 필요합니다",
        )
    return current_user
