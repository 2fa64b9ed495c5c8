# app/schemas/review.py

from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal


class Review(BaseModel):
    review_id: int = Field(description="리뷰 ID")
    movie_id: int = Field(description="영화 ID")
    user_id: int = Field(description="작성자 ID")
    rating: Optional[Decimal] = Field(default=None, description="평점 (0.0 ~ 10.0)")
    title: Optional[str] = Field(default=None, description="리뷰 제목")
    content: str = Field(description="리뷰 내용")
    likes_count: int = Field(default=0, description="좋아요 수")
    is_liked: bool = Field(default=False, description="현재 사용자 좋아요 여부")
    is_author: bool = Field(default=False, description="현재 사용자 작성 여부")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")

    # 작성자 정보 (조회시 포함)
    user_email: Optional[str] = Field(default=None, description="작성자 이메일")
    user_name: Optional[str] = Field(default=None, description="작성자 이름")

    class Config:
        from_attributes = True


class ReviewCreate(BaseModel):
    movie_id: int = Field(description="영화 ID")
    rating: Optional[Decimal] = Field(
        default=None,
        description="평점 (0.0 ~ 10.0)",
        ge=0.0,
        le=10.0
    )
    title: Optional[str] = Field(default=None, description="리뷰 제목", max_length=255)
    content: str = Field(description="리뷰 내용", min_length=1, max_length=5000)


class ReviewUpdate(BaseModel):
    rating: Optional[Decimal] = Field(
        default=None,
        description="평점 (0.0 ~ 10.0)",
        ge=0.0,
        le=10.0
    )
    title: Optional[str] = Field(default=None, description="리뷰 제목", max_length=255)
    content: Optional[str] = Field(default=None, description="리뷰 내용", min_length=1, max_length=5000)


class ReviewPage(BaseModel):
    reviews: List[Review] = Field(description="리뷰 목록")
    total: int = Field(description="전체 리뷰 수")
    page: int = Field(description="현재 페이지")
    size: int = Field(description="페이지 크기")
