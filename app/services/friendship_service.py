# app/services/friendship_service.py

import logging
from datetime import datetime
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select, and_, or_
from app.models.friendship import FriendshipModel, FriendshipStatus
from app.models.user import UserModel
from app.schemas.friendship import Friendship, FriendInfo
from app.core.exceptions import BadRequestException, ConflictException, NotFoundException

logger = logging.getLogger(__name__)


def _between(user_id: int, friend_id: int):
    """방향과 관계없이 두 사용자 사이의 관계"""
    return or_(
        and_(FriendshipModel.user_id == user_id, FriendshipModel.friend_id == friend_id),
        and_(FriendshipModel.user_id == friend_id, FriendshipModel.friend_id == user_id),
    )


class FriendshipService:

    def __init__(self, db: Session):
        self.db = db

    async def add_friend(self, user_id: int, friend_id: int) -> Friendship:
        """친구 추가 (바로 수락 상태)"""
        if user_id == friend_id:
            raise BadRequestException("자기 자신을 친구로 추가할 수 없습니다")

        if not self.db.get(UserModel, friend_id):
            raise NotFoundException(f"사용자를 찾을 수 없습니다: {friend_id}")

        existing = select(FriendshipModel.friendship_id).where(_between(user_id, friend_id))
        if self.db.execute(existing).first() is not None:
            raise ConflictException("이미 친구입니다")

        friendship = FriendshipModel(
            user_id=user_id,
            friend_id=friend_id,
            status=FriendshipStatus.ACCEPTED,
            accepted_at=datetime.utcnow(),
        )
        try:
            self.db.add(friendship)
            self.db.commit()
            self.db.refresh(friendship)
        except Exception:
            self.db.rollback()
            raise

        logger.info("친구 추가: %s -> %s", user_id, friend_id)
        return Friendship.model_validate(friendship)

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        stmt = select(FriendshipModel).where(_between(user_id, friend_id))
        friendships = self.db.execute(stmt).scalars().all()
        if not friendships:
            raise NotFoundException("친구 관계를 찾을 수 없습니다")

        try:
            for friendship in friendships:
                self.db.delete(friendship)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("친구 삭제: %s <-> %s", user_id, friend_id)

    async def get_friend_ids(self, user_id: int) -> List[int]:
        stmt = select(FriendshipModel).where(
            and_(
                or_(FriendshipModel.user_id == user_id, FriendshipModel.friend_id == user_id),
                FriendshipModel.status == FriendshipStatus.ACCEPTED,
            )
        )
        friend_ids = []
        for friendship in self.db.execute(stmt).scalars().all():
            other = friendship.friend_id if friendship.user_id == user_id else friendship.user_id
            if other not in friend_ids:
                friend_ids.append(other)
        return friend_ids

    async def get_friends(self, user_id: int) -> List[FriendInfo]:
        friend_ids = await self.get_friend_ids(user_id)
        if not friend_ids:
            return []

        stmt = (
            select(UserModel)
            .where(UserModel.user_id.in_(friend_ids))
            .order_by(UserModel.first_name, UserModel.last_name)
        )
        return [
            FriendInfo(
                user_id=user.user_id,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
            )
            for user in self.db.execute(stmt).scalars().all()
        ]

    async def are_friends(self, user_id: int, friend_id: int) -> bool:
        stmt = select(FriendshipModel.friendship_id).where(
            and_(
                _between(user_id, friend_id),
                FriendshipModel.status == FriendshipStatus.ACCEPTED,
            )
        )
        return self.db.execute(stmt).first() is not None
