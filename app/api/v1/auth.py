# app/api/v1/auth.py

import logging
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from app.schemas.user import User, UserRegister, UserLogin, TokenResponse
from app.services.user_service import UserService
from app.services.token_blacklist_service import TokenBlacklist, get_token_blacklist
from app.core.auth import create_access_token, decode_access_token, token_expiration
from app.core.dependencies import security, get_current_user, get_user_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(user: User) -> TokenResponse:
    access_token = create_access_token(data={"sub": user.email, "role": user.role.value})
    return TokenResponse(access_token=access_token, user=user)


# 회원가입
@router.post(
    "/register",
    response_model=TokenResponse,
    summary="회원가입",
    description="이메일과 비밀번호로 회원가입하고 액세스 토큰을 발급합니다.",
)
async def register(user_data: UserRegister, user_service: UserService = Depends(get_user_service)):
    user = await user_service.register_user(user_data)
    return _issue_token(user)


# 로그인
@router.post(
    "/authenticate",
    response_model=TokenResponse,
    summary="로그인",
    description="이메일과 비밀번호로 로그인합니다.",
)
async def authenticate(login_data: UserLogin, user_service: UserService = Depends(get_user_service)):
    user = await user_service.authenticate_user(email=login_data.email, password=login_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="이메일 또는 비밀번호가 잘못되었습니다",
        )

    logger.info("로그인 성공: %s", user.email)
    return _issue_token(user)


# 로그아웃
@router.post(
    "/logout",
    summary="로그아웃",
    description="현재 토큰을 만료 시각까지 사용할 수 없도록 등록합니다.",
)
async def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    current_user: User = Depends(get_current_user),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
):
    token = credentials.credentials
    payload = decode_access_token(token)
    blacklist.add(token, token_expiration(payload))

    logger.info("로그아웃: %s", current_user.email)
    return {"message": "로그아웃되었습니다"}


@router.get(
    "/me",
    response_model=User,
    summary="내 정보 조회",
)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user
