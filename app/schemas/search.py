# app/schemas/search.py

from typing import List, Optional
from decimal import Decimal
from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel


class MovieSearchRequest(BaseModel):
    """영화 검색 조건 (snake_case, camelCase 모두 허용)"""

    # 기본 검색
    query: Optional[str] = Field(default=None, description="제목 검색어")
    overview: Optional[str] = Field(default=None, description="줄거리 검색어")
    search_foreign: Optional[bool] = Field(default=None, description="원제까지 검색 여부")

    # 빠른 필터
    highly_rated: Optional[bool] = Field(default=None, description="평점 7.0 이상")
    popular: Optional[bool] = Field(default=None, description="투표 수 1000 이상")
    recently_released: Optional[bool] = Field(default=None, description="최근 5년 개봉")
    short_runtime: Optional[bool] = Field(default=None, description="90분 이하")

    # 상세 필터
    genres: Optional[List[str]] = Field(default=None, description="장르 (모두 포함)")
    actors: Optional[List[str]] = Field(default=None, description="배우 (하나라도 포함)")
    director: Optional[str] = Field(default=None, description="감독")
    min_rating: Optional[float] = Field(default=None, description="최소 평점")
    max_rating: Optional[float] = Field(default=None, description="최대 평점")
    min_imdb_rating: Optional[float] = Field(default=None, description="최소 IMDB 평점")
    max_imdb_rating: Optional[float] = Field(default=None, description="최대 IMDB 평점")
    min_year: Optional[int] = Field(default=None, description="최소 개봉연도")
    max_year: Optional[int] = Field(default=None, description="최대 개봉연도")
    min_runtime: Optional[int] = Field(default=None, description="최소 상영시간(분)")
    max_runtime: Optional[int] = Field(default=None, description="최대 상영시간(분)")
    min_vote_count: Optional[int] = Field(default=None, description="최소 투표 수")

    # 페이지네이션 / 정렬
    page: int = Field(default=0, ge=0, description="페이지 번호 (0부터)")
    size: int = Field(default=20, gt=0, description="페이지 크기")
    sort_by: Optional[str] = Field(default="popularity", description="정렬 기준")
    sort_direction: Optional[str] = Field(default="desc", description="정렬 방향 (asc, desc)")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class MovieCard(BaseModel):
    """검색 결과 카드용 영화 요약"""

    id: int = Field(description="영화 ID")
    title: str = Field(description="영화 제목")
    original_title: Optional[str] = Field(default=None, description="원제")
    release_year: Optional[int] = Field(default=None, description="개봉연도")
    rating: Decimal = Field(default=Decimal("0"), description="표시 평점")
    is_imdb_rated: bool = Field(default=False, description="IMDB 평점 사용 여부")
    imdb_rating: Optional[Decimal] = Field(default=None, description="IMDB 평점")
    vote_count: int = Field(default=0, description="투표 수")
    popularity: Decimal = Field(default=Decimal("0"), description="인기도")
    poster_path: Optional[str] = Field(default=None, description="포스터 경로")
    overview: Optional[str] = Field(default=None, description="줄거리")
    genres: List[str] = Field(default_factory=lambda: ["Unknown"], description="장르 목록")
    director: str = Field(default="Unknown", description="감독")
    main_stars: List[str] = Field(default_factory=list, description="주연 배우")
    runtime: int = Field(default=0, description="상영시간(분)")

    @computed_field
    @property
    def rating_source(self) -> str:
        return "IMDB" if self.is_imdb_rated else "TMDb"

    @computed_field
    @property
    def primary_genre(self) -> str:
        return self.genres[0] if self.genres else "Unknown"

    @computed_field
    @property
    def short_overview(self) -> Optional[str]:
        if self.overview is None or len(self.overview) <= 150:
            return self.overview
        return self.overview[:147] + "..."

    @computed_field
    @property
    def display_title(self) -> str:
        if self.release_year is not None:
            return f"{self.title} ({self.release_year})"
        return self.title


class MovieSearchResponse(BaseModel):
    """영화 검색 응답"""

    movies: List[MovieCard] = Field(description="검색 결과")
    current_page: int = Field(description="현재 페이지")
    total_pages: int = Field(description="전체 페이지 수")
    total_results: int = Field(description="전체 결과 수")
    has_more_results: bool = Field(description="다음 페이지 존재 여부")
    search_query: Optional[str] = Field(default=None, description="검색어")
    applied_filters: str = Field(description="적용된 필터 요약")
    search_time_ms: float = Field(description="검색 소요시간(ms)")
    sorted_by: str = Field(description="정렬 기준")
    sort_direction: str = Field(description="정렬 방향")

    @computed_field
    @property
    def result_summary(self) -> str:
        if self.total_results == 0:
            return "No movies found"
        if self.total_results == 1:
            return "1 movie found"
        return f"{self.total_results} movies found"
