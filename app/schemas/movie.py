# app/schemas/movie.py

from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal


class Movie(BaseModel):
    movie_id: int = Field(description="영화 ID")
    title: Optional[str] = Field(default=None, description="영화 제목")
    original_title: Optional[str] = Field(default=None, description="원제")
    overview: Optional[str] = Field(default=None, description="줄거리")
    status: Optional[str] = Field(default=None, description="개봉 상태")
    vote_average: Optional[Decimal] = Field(default=None, description="평균 평점")
    vote_count: Optional[int] = Field(default=None, description="투표 수")
    imdb_rating: Optional[Decimal] = Field(default=None, description="IMDB 평점")
    popularity: Optional[Decimal] = Field(default=None, description="인기도")
    release_year: Optional[int] = Field(default=None, description="개봉연도")
    runtime: Optional[int] = Field(default=None, description="상영시간(분)")
    adult: Optional[bool] = Field(default=None, description="성인 영화 여부")
    poster_path: Optional[str] = Field(default=None, description="포스터 경로")
    director: Optional[str] = Field(default=None, description="감독")
    star1: Optional[str] = Field(default=None, description="주연 1")
    star2: Optional[str] = Field(default=None, description="주연 2")
    star3: Optional[str] = Field(default=None, description="주연 3")
    star4: Optional[str] = Field(default=None, description="주연 4")
    cast_list: Optional[str] = Field(default=None, description="출연진 목록")
    genres_list: Optional[str] = Field(default=None, description="장르 목록")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")

    class Config:
        from_attributes = True


class MovieUpdate(BaseModel):
    """관리자 영화 수정 요청 (전달된 값만 반영)"""

    title: Optional[str] = Field(default=None, description="영화 제목")
    director: Optional[str] = Field(default=None, description="감독")
    overview: Optional[str] = Field(default=None, description="줄거리")
    release_year: Optional[int] = Field(default=None, description="개봉연도")
    runtime: Optional[int] = Field(default=None, description="상영시간(분)")
    vote_average: Optional[Decimal] = Field(default=None, description="평균 평점")
    genres_list: Optional[str] = Field(default=None, description="장르 목록")
    poster_path: Optional[str] = Field(default=None, description="포스터 경로")


class MovieStats(BaseModel):
    """관리자용 영화 통계"""

    total_movies: int = Field(description="전체 영화 수")
    genre_counts: Dict[str, int] = Field(default_factory=dict, description="장르별 영화 수")


class ImportResult(BaseModel):
    """CSV 가져오기 결과"""

    success_count: int = Field(description="성공 건수")
    error_count: int = Field(description="실패 건수")
    total_lines: int = Field(description="전체 줄 수 (헤더 포함)")
    errors: List[str] = Field(default_factory=list, description="오류 목록")

    @property
    def summary(self) -> str:
        return (
            f"Imported {self.success_count} movies successfully, "
            f"{self.error_count} errors out of {self.total_lines} lines"
        )
