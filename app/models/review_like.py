# app/models/review_like.py

from sqlalchemy import Column, BigInteger, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.database import Base


class ReviewLikeModel(Base):
    __tablename__ = "review_likes"

    user_id = Column(BigInteger, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    review_id = Column(BigInteger, ForeignKey("reviews.review_id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=func.current_timestamp())

    def __repr__(self):
        return f"<ReviewLikeModel(user_id={self.user_id}, review_id={self.review_id})>"
