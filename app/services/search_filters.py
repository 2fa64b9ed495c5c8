# app/services/search_filters.py

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional
from app.schemas.search import MovieSearchRequest

logger = logging.getLogger(__name__)


class GenreNormalizer:
    """자유 입력 장르명을 DB 표준 장르명으로 변환"""

    GENRE_ALIASES: Dict[str, str] = {
        "sci-fi": "Science Fiction",
        "scifi": "Science Fiction",
        "sf": "Science Fiction",
        "horror": "Horror",
        "comedy": "Comedy",
        "drama": "Drama",
        "action": "Action",
        "adventure": "Adventure",
        "romance": "Romance",
        "thriller": "Thriller",
        "mystery": "Mystery",
        "crime": "Crime",
        "animation": "Animation",
    }

    def normalize(self, genres: Optional[List[str]]) -> Optional[List[str]]:
        if not genres:
            return genres

        normalized = []
        for genre in genres:
            canonical = self.GENRE_ALIASES.get(genre.strip().lower(), genre)
            if canonical != genre:
                logger.debug("장르 별칭 변환: '%s' -> '%s'", genre, canonical)
            normalized.append(canonical)
        return normalized

    def apply(self, request: MovieSearchRequest) -> MovieSearchRequest:
        if not request.genres:
            return request
        return request.model_copy(update={"genres": self.normalize(request.genres)})


class QuickFilterExpander:
    """빠른 필터(체크박스)를 실제 범위 조건으로 펼침

    각 규칙은 해당 상세 필터가 비어 있을 때만 적용되며 서로의 결과를 참조하지 않는다.
    """

    HIGHLY_RATED_MIN_RATING = 7.0
    POPULAR_MIN_VOTE_COUNT = 1000
    RECENT_YEARS = 5
    SHORT_RUNTIME_MAX = 90

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def expand(self, request: MovieSearchRequest) -> MovieSearchRequest:
        updates = {}

        if request.highly_rated and request.min_rating is None:
            updates["min_rating"] = self.HIGHLY_RATED_MIN_RATING

        if request.popular and request.min_vote_count is None:
            updates["min_vote_count"] = self.POPULAR_MIN_VOTE_COUNT

        if request.recently_released and request.min_year is None:
            updates["min_year"] = self.clock().year - self.RECENT_YEARS

        if request.short_runtime and request.max_runtime is None:
            updates["max_runtime"] = self.SHORT_RUNTIME_MAX

        if not updates:
            return request

        logger.debug("빠른 필터 적용: %s", updates)
        return request.model_copy(update=updates)
