# app/services/__init__.py

from .movie_search_service import MovieSearchService
from .movie_service import MovieService
from .user_service import UserService
from .review_service import ReviewService
from .watchlist_service import WatchlistService
from .friendship_service import FriendshipService
from .csv_service import CsvService

__all__ = [
    "MovieSearchService",
    "MovieService",
    "UserService",
    "ReviewService",
    "WatchlistService",
    "FriendshipService",
    "CsvService",
]
