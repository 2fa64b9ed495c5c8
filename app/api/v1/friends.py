# app/api/v1/friends.py

from typing import List
from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.friendship import Friendship, FriendInfo
from app.schemas.user import User
from app.services.friendship_service import FriendshipService
from app.core.dependencies import get_current_user

router = APIRouter()


def get_friendship_service(db: Session = Depends(get_db)) -> FriendshipService:
    return FriendshipService(db)


@router.post(
    "/{friend_id}",
    response_model=Friendship,
    status_code=status.HTTP_201_CREATED,
    summary="친구 추가",
)
async def add_friend(
    friend_id: int = Path(description="친구로 추가할 사용자 ID"),
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    return await friendship_service.add_friend(current_user.user_id, friend_id)


@router.delete(
    "/{friend_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="친구 삭제",
)
async def remove_friend(
    friend_id: int = Path(description="친구 ID"),
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    await friendship_service.remove_friend(current_user.user_id, friend_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/",
    response_model=List[FriendInfo],
    summary="친구 목록",
)
async def get_friends(
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    return await friendship_service.get_friends(current_user.user_id)


@router.get(
    "/check/{friend_id}",
    summary="친구 여부 확인",
)
async def check_friendship(
    friend_id: int = Path(description="사용자 ID"),
    current_user: User = Depends(get_current_user),
    friendship_service: FriendshipService = Depends(get_friendship_service),
):
    are_friends = await friendship_service.are_friends(current_user.user_id, friend_id)
    return {"friend_id": friend_id, "are_friends": are_friends}
