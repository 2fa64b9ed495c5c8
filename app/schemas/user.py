# app/schemas/user.py

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from app.models.user import Role


class User(BaseModel):
    user_id: Optional[int] = Field(default=None, description="사용자 ID")
    email: str = Field(description="이메일")
    first_name: str = Field(description="이름")
    last_name: str = Field(description="성")
    role: Role = Field(default=Role.USER, description="권한")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")
    last_login: Optional[datetime] = Field(default=None, description="마지막 로그인")
    is_active: bool = Field(default=True, description="활성 상태")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    class Config:
        from_attributes = True


class UserRegister(BaseModel):
    email: str = Field(description="이메일")
    password: str = Field(description="비밀번호", min_length=6)
    first_name: str = Field(description="이름", min_length=1)
    last_name: str = Field(description="성", min_length=1)


class UserLogin(BaseModel):
    email: str = Field(description="이메일")
    password: str = Field(description="비밀번호")


class TokenResponse(BaseModel):
    access_token: str = Field(description="액세스 토큰")
    token_type: str = Field(default="bearer", description="토큰 타입")
    user: User = Field(description="사용자 정보")
