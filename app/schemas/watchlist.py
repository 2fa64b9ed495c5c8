# app/schemas/watchlist.py

from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from app.models.watchlist import WatchlistStatus


class WatchlistEntry(BaseModel):
    """왓치리스트 항목 (영화 정보 포함)"""

    watchlist_id: int = Field(description="왓치리스트 ID")
    user_id: int = Field(description="사용자 ID")
    movie_id: int = Field(description="영화 ID")
    movie_title: Optional[str] = Field(default=None, description="영화 제목")
    movie_release_year: Optional[int] = Field(default=None, description="개봉연도")
    movie_poster_path: Optional[str] = Field(default=None, description="포스터 경로")
    status: WatchlistStatus = Field(description="시청 상태")
    is_public: bool = Field(default=False, description="친구 공개 여부")
    notes: Optional[str] = Field(default=None, description="메모")
    added_at: Optional[datetime] = Field(default=None, description="추가일")
    updated_at: Optional[datetime] = Field(default=None, description="수정일")


class WatchlistAdd(BaseModel):
    movie_id: int = Field(description="추가할 영화 ID")
    status: Optional[WatchlistStatus] = Field(default=None, description="시청 상태")


class WatchlistStatusUpdate(BaseModel):
    status: WatchlistStatus = Field(description="변경할 시청 상태")


class WatchlistDetailsUpdate(BaseModel):
    is_public: Optional[bool] = Field(default=None, description="친구 공개 여부")
    notes: Optional[str] = Field(default=None, description="메모")


class WatchlistPage(BaseModel):
    entries: List[WatchlistEntry] = Field(description="왓치리스트 목록")
    total: int = Field(description="전체 항목 수")
    page: int = Field(description="현재 페이지")
    size: int = Field(description="페이지 크기")
