# app/models/friendship.py

import enum
from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    DateTime,
    Enum,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from app.database import Base


class FriendshipStatus(enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    BLOCKED = "BLOCKED"


class FriendshipModel(Base):
    __tablename__ = "friendships"

    friendship_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    user_id = Column(
        BigInteger, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )  # 친구 추가한 사람
    friend_id = Column(
        BigInteger, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )  # 친구로 추가된 사람
    status = Column(Enum(FriendshipStatus), default=FriendshipStatus.ACCEPTED, nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    accepted_at = Column(DateTime, nullable=True)

    __table_args__ = (UniqueConstraint("user_id", "friend_id", name="unique_friendship"),)

    def __repr__(self):
        return f"<FriendshipModel(user_id={self.user_id}, friend_id={self.friend_id}, status={self.status})>"
