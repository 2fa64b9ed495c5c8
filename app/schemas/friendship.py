# app/schemas/friendship.py

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from app.models.friendship import FriendshipStatus


class Friendship(BaseModel):
    user_id: int = Field(description="친구 추가한 사용자 ID")
    friend_id: int = Field(description="친구 ID")
    status: FriendshipStatus = Field(description="친구 상태")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    accepted_at: Optional[datetime] = Field(default=None, description="수락일시")

    class Config:
        from_attributes = True


class FriendInfo(BaseModel):
    user_id: int = Field(description="친구 ID")
    email: str = Field(description="이메일")
    first_name: str = Field(description="이름")
    last_name: str = Field(description="성")
