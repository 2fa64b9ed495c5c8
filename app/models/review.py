# app/models/review.py

from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    String,
    Text,
    DECIMAL,
    DateTime,
    ForeignKey,
)
from sqlalchemy.sql import func
from app.database import Base


class ReviewModel(Base):
    __tablename__ = "reviews"

    review_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    movie_id = Column(BigInteger, ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False)
    user_id = Column(BigInteger, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    rating = Column(DECIMAL(3, 1), nullable=True)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<ReviewModel(id={self.review_id}, movie_id={self.movie_id}, rating={self.rating})>"
