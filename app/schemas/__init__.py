# app/schemas/__init__.py

from .movie import Movie, MovieUpdate, MovieStats, ImportResult
from .search import MovieSearchRequest, MovieCard, MovieSearchResponse
from .user import User, UserRegister, UserLogin, TokenResponse
from .review import Review, ReviewCreate, ReviewUpdate, ReviewPage
from .watchlist import (
    WatchlistEntry,
    WatchlistAdd,
    WatchlistStatusUpdate,
    WatchlistDetailsUpdate,
    WatchlistPage,
)
from .friendship import Friendship, FriendInfo

__all__ = [
    "Movie",
    "MovieUpdate",
    "MovieStats",
    "ImportResult",
    "MovieSearchRequest",
    "MovieCard",
    "MovieSearchResponse",
    "User",
    "UserRegister",
    "UserLogin",
    "TokenResponse",
    "Review",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewPage",
    "WatchlistEntry",
    "WatchlistAdd",
    "WatchlistStatusUpdate",
    "WatchlistDetailsUpdate",
    "WatchlistPage",
    "Friendship",
    "FriendInfo",
]
