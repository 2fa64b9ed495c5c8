# app/models/watchlist.py

import enum
from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    Boolean,
    Text,
    DateTime,
    Enum,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from app.database import Base


class WatchlistStatus(enum.Enum):
    WANT_TO_WATCH = "WANT_TO_WATCH"
    WATCHING = "WATCHING"
    WATCHED = "WATCHED"
    NOT_INTERESTED = "NOT_INTERESTED"


class WatchlistModel(Base):
    __tablename__ = "watchlists"

    watchlist_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    user_id = Column(BigInteger, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    movie_id = Column(BigInteger, ForeignKey("movies.movie_id", ondelete="CASCADE"), nullable=False)
    status = Column(Enum(WatchlistStatus), default=WatchlistStatus.WANT_TO_WATCH, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)  # 친구에게 공개 여부
    notes = Column(Text, nullable=True)
    added_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    __table_args__ = (UniqueConstraint("user_id", "movie_id", name="unique_watchlist"),)

    def __repr__(self):
        return f"<WatchlistModel(user_id={self.user_id}, movie_id={self.movie_id}, status={self.status})>"
