# app/services/user_service.py

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.user import UserModel, Role
from app.schemas.user import User, UserRegister
from app.core.auth import get_password_hash, verify_password
from app.core.exceptions import ConflictException

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email)
        user_model = self.db.execute(stmt).scalar_one_or_none()

        return User.model_validate(user_model) if user_model else None

    async def register_user(self, user_data: UserRegister, role: Role = Role.USER) -> User:
        # 이메일 중복 체크
        if await self.get_user_by_email(user_data.email):
            raise ConflictException("이미 등록된 이메일입니다")

        user_model = UserModel(
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            role=role,
        )

        try:
            self.db.add(user_model)
            self.db.commit()
            self.db.refresh(user_model)
        except Exception:
            self.db.rollback()
            raise

        logger.info("회원가입 완료: %s", user_model.email)
        return User.model_validate(user_model)

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email)
        user_model = self.db.execute(stmt).scalar_one_or_none()

        if (
            not user_model
            or not user_model.is_active
            or not verify_password(password, user_model.password_hash)
        ):
            logger.info("로그인 실패: %s", email)
            return None

        # 마지막 로그인 시간 업데이트
        user_model.last_login = datetime.utcnow()
        self.db.commit()
        self.db.refresh(user_model)

        return User.model_validate(user_model)
