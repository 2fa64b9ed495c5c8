# app/models/__init__.py

from .movie import MovieModel
from .user import UserModel, Role
from .review import ReviewModel
from .review_like import ReviewLikeModel
from .watchlist import WatchlistModel, WatchlistStatus
from .friendship import FriendshipModel, FriendshipStatus


__all__ = [
    "MovieModel",
    "UserModel",
    "Role",
    "ReviewModel",
    "ReviewLikeModel",
    "WatchlistModel",
    "WatchlistStatus",
    "FriendshipModel",
    "FriendshipStatus",
]
