# app/services/movie_search_service.py

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from app.models.movie import MovieModel
from app.schemas.search import MovieSearchRequest, MovieSearchResponse
from app.services.movie_card import MovieCardProjector
from app.services.search_filters import GenreNormalizer, QuickFilterExpander
from app.services.search_predicates import PredicateBuilder, SortResolver, SortSpec

logger = logging.getLogger(__name__)


@dataclass
class MoviePage:
    """DB에서 가져온 한 페이지 분량의 영화 레코드"""

    movies: List[MovieModel]
    page: int
    size: int
    total: int
    sort: SortSpec
    request: MovieSearchRequest

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.total else 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages - 1


class MovieSearchService:
    """동적 영화 검색

    빠른 필터 확장 -> 장르 정규화 -> WHERE 절 조합 -> 정렬/페이지 -> 조회 -> 카드 변환.
    DB 오류는 감싸지 않고 그대로 호출자에게 전달한다.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.quick_filters = QuickFilterExpander(clock or datetime.now)
        self.genre_normalizer = GenreNormalizer()
        self.predicate_builder = PredicateBuilder()
        self.sort_resolver = SortResolver()
        self.card_projector = MovieCardProjector()

    def normalize(self, request: MovieSearchRequest) -> MovieSearchRequest:
        """빠른 필터와 장르 별칭을 반영한 검색 조건"""
        expanded = self.quick_filters.expand(request)
        return self.genre_normalizer.apply(expanded)

    async def search_records(self, request: MovieSearchRequest) -> MoviePage:
        """검색 조건에 맞는 영화 레코드 한 페이지 조회"""
        normalized = self.normalize(request)
        logger.info("영화 검색 조건: %s", normalized.model_dump(exclude_none=True))

        where_clause = self.predicate_builder.build(normalized)
        sort = self.sort_resolver.resolve(normalized.sort_by, normalized.sort_direction)

        count_stmt = select(func.count()).select_from(MovieModel).where(where_clause)
        total = self.db.execute(count_stmt).scalar_one()

        stmt = (
            select(MovieModel)
            .where(where_clause)
            .order_by(sort.order_by())
            .offset(normalized.page * normalized.size)
            .limit(normalized.size)
        )
        movies = list(self.db.execute(stmt).scalars().all())

        page = MoviePage(
            movies=movies,
            page=normalized.page,
            size=normalized.size,
            total=total,
            sort=sort,
            request=normalized,
        )
        logger.info(
            "영화 검색 완료: 전체 %d건, %d페이지, 현재 페이지 %d건",
            page.total,
            page.total_pages,
            len(movies),
        )
        return page

    async def search(self, request: MovieSearchRequest) -> MovieSearchResponse:
        """영화 검색 후 카드 목록과 페이지 정보 반환"""
        started = time.perf_counter()

        page = await self.search_records(request)
        cards = [self.card_projector.project(movie) for movie in page.movies]

        elapsed_ms = (time.perf_counter() - started) * 1000
        return MovieSearchResponse(
            movies=cards,
            current_page=page.page,
            total_pages=page.total_pages,
            total_results=page.total,
            has_more_results=page.has_more,
            search_query=request.query,
            applied_filters=build_filter_summary(page.request),
            search_time_ms=round(elapsed_ms, 2),
            sorted_by=page.sort.key,
            sort_direction=page.sort.direction,
        )


def build_filter_summary(request: MovieSearchRequest) -> str:
    """사용자가 지정한 필터 요약 (항상 적용되는 기본 조건은 제외)"""
    filters = []

    if request.query and request.query.strip():
        filters.append(f"Query: '{request.query}'")
    if request.search_foreign:
        filters.append("Including Original Titles")
    if request.overview and request.overview.strip():
        filters.append(f"Overview: '{request.overview}'")
    genres = [genre for genre in request.genres or [] if genre.strip()]
    if genres:
        filters.append("Genres: " + ", ".join(genres))
    if request.min_rating is not None:
        filters.append(f"Rating ≥ {request.min_rating}")
    if request.max_rating is not None:
        filters.append(f"Rating ≤ {request.max_rating}")
    if request.min_imdb_rating is not None:
        filters.append(f"IMDB ≥ {request.min_imdb_rating}")
    if request.max_imdb_rating is not None:
        filters.append(f"IMDB ≤ {request.max_imdb_rating}")
    if request.min_vote_count is not None:
        filters.append(f"Votes ≥ {request.min_vote_count}")
    if request.min_year is not None:
        filters.append(f"Year ≥ {request.min_year}")
    if request.max_year is not None:
        filters.append(f"Year ≤ {request.max_year}")
    if request.min_runtime is not None:
        filters.append(f"Runtime ≥ {request.min_runtime} min")
    if request.max_runtime is not None:
        filters.append(f"Runtime ≤ {request.max_runtime} min")
    if request.director and request.director.strip():
        filters.append(f"Director: {request.director}")
    actors = [
        actor for actor in request.actors or [] if actor.strip() and actor.strip().lower() != "unknown"
    ]
    if actors:
        filters.append("Actors: " + ", ".join(actors))
    if request.highly_rated:
        filters.append("Highly Rated")
    if request.popular:
        filters.append("Popular")
    if request.recently_released:
        filters.append("Recently Released")
    if request.short_runtime:
        filters.append("Short Runtime")

    return ", ".join(filters) if filters else "No filters"
