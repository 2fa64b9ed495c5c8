# app/services/search_predicates.py

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from sqlalchemy import and_, or_, not_, asc, desc
from sqlalchemy.sql.elements import ColumnElement
from app.models.movie import MovieModel
from app.schemas.search import MovieSearchRequest

logger = logging.getLogger(__name__)


def _has_text(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def _contains(column, term: str) -> ColumnElement:
    """대소문자 구분 없는 부분 문자열 일치"""
    return column.ilike(f"%{term.strip().lower()}%")


class PredicateBuilder:
    """검색 조건을 MovieModel 대상 WHERE 절 하나로 조합

    조건 종류별로 이름 붙은 슬롯을 독립적으로 만든 뒤 마지막에 AND로 합친다.
    """

    SLOT_ORDER = (
        "mandatory",
        "title",
        "overview",
        "genres",
        "rating",
        "imdb_rating",
        "vote_count",
        "year",
        "runtime",
        "director",
        "actors",
    )

    ACTOR_COLUMNS = (
        MovieModel.star1,
        MovieModel.star2,
        MovieModel.star3,
        MovieModel.star4,
        MovieModel.cast_list,
    )

    def build(self, request: MovieSearchRequest) -> ColumnElement:
        slots = self.build_slots(request)
        predicates = [p for name in self.SLOT_ORDER for p in slots.get(name, [])]
        logger.debug("검색 조건 %d개 조합 (슬롯: %s)", len(predicates), list(slots))
        return and_(*predicates)

    def build_slots(self, request: MovieSearchRequest) -> Dict[str, List[ColumnElement]]:
        slots = {
            "mandatory": self._mandatory(),
            "title": self._title(request),
            "overview": self._overview(request),
            "genres": self._genres(request),
            "rating": self._range(MovieModel.vote_average, request.min_rating, request.max_rating),
            "imdb_rating": self._range(
                MovieModel.imdb_rating, request.min_imdb_rating, request.max_imdb_rating
            ),
            "vote_count": self._range(MovieModel.vote_count, request.min_vote_count, None),
            "year": self._range(MovieModel.release_year, request.min_year, request.max_year),
            "runtime": self._runtime(request),
            "director": self._director(request),
            "actors": self._actors(request),
        }
        return {name: predicates for name, predicates in slots.items() if predicates}

    def _mandatory(self) -> List[ColumnElement]:
        # 성인물 제외 + 제목 없는 데이터 제외
        return [
            or_(MovieModel.adult.is_(None), MovieModel.adult == False),  # noqa: E712
            MovieModel.title.isnot(None),
        ]

    def _title(self, request: MovieSearchRequest) -> List[ColumnElement]:
        if not _has_text(request.query):
            return []
        title_match = _contains(MovieModel.title, request.query)
        if request.search_foreign:
            return [or_(title_match, _contains(MovieModel.original_title, request.query))]
        return [title_match]

    def _overview(self, request: MovieSearchRequest) -> List[ColumnElement]:
        if not _has_text(request.overview):
            return []
        return [_contains(MovieModel.overview, request.overview)]

    def _genres(self, request: MovieSearchRequest) -> List[ColumnElement]:
        # 요청한 장르를 모두 포함해야 함 ("Action, Adventure" 같은 복합 문자열 대응)
        return [
            _contains(MovieModel.genres_list, genre)
            for genre in request.genres or []
            if _has_text(genre)
        ]

    def _range(self, column, minimum, maximum) -> List[ColumnElement]:
        predicates = []
        if minimum is not None:
            predicates.append(column >= minimum)
        if maximum is not None:
            predicates.append(column <= maximum)
        return predicates

    def _runtime(self, request: MovieSearchRequest) -> List[ColumnElement]:
        if request.min_runtime is None and request.max_runtime is None:
            return []
        # 상영시간 정보가 없거나 0인 영화는 제외
        predicates = [and_(MovieModel.runtime.isnot(None), MovieModel.runtime > 0)]
        predicates.extend(
            self._range(MovieModel.runtime, request.min_runtime, request.max_runtime)
        )
        return predicates

    def _director(self, request: MovieSearchRequest) -> List[ColumnElement]:
        if not _has_text(request.director):
            return []
        return [
            and_(
                _contains(MovieModel.director, request.director),
                not_(MovieModel.director.ilike("%unknown%")),
            )
        ]

    def _actors(self, request: MovieSearchRequest) -> List[ColumnElement]:
        actor_matches = []
        for actor in request.actors or []:
            name = actor.strip().lower()
            if not name or name == "unknown":
                continue
            actor_matches.extend(_contains(column, name) for column in self.ACTOR_COLUMNS)

        if not actor_matches:
            return []
        return [or_(*actor_matches)]


@dataclass(frozen=True)
class SortSpec:
    key: str
    column: object
    ascending: bool

    @property
    def direction(self) -> str:
        return "asc" if self.ascending else "desc"

    def order_by(self):
        return asc(self.column) if self.ascending else desc(self.column)


class SortResolver:
    """정렬 키를 실제 컬럼으로 변환 (알 수 없는 값은 인기도 순)"""

    DEFAULT_KEY = "popularity"

    SORT_COLUMNS = {
        "rating": MovieModel.vote_average,
        "imdb": MovieModel.imdb_rating,
        "votes": MovieModel.vote_count,
        "year": MovieModel.release_year,
        "title": MovieModel.title,
        "runtime": MovieModel.runtime,
        "popularity": MovieModel.popularity,
    }

    def resolve(self, sort_by: Optional[str], sort_direction: Optional[str]) -> SortSpec:
        key = (sort_by or "").strip().lower()
        if key not in self.SORT_COLUMNS:
            key = self.DEFAULT_KEY
        ascending = (sort_direction or "").strip().lower() == "asc"
        return SortSpec(key=key, column=self.SORT_COLUMNS[key], ascending=ascending)
