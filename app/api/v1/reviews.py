# app/api/v1/reviews.py

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.review import Review, ReviewCreate, ReviewUpdate, ReviewPage
from app.schemas.user import User
from app.services.review_service import ReviewService
from app.core.dependencies import get_current_user, get_optional_current_user

router = APIRouter()


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@router.get(
    "/movie/{movie_id}",
    response_model=ReviewPage,
    summary="영화 리뷰 조회",
    description="특정 영화의 리뷰를 최신순으로 조회합니다.",
)
async def get_movie_reviews(
    movie_id: int = Path(description="영화 ID"),
    page: int = Query(default=0, ge=0, description="페이지 번호 (0부터)"),
    size: int = Query(default=20, ge=1, le=100, description="페이지 크기"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    current_user_id = current_user.user_id if current_user else None
    return await review_service.get_movie_reviews(movie_id, current_user_id, page, size)


@router.post(
    "/",
    response_model=Review,
    status_code=status.HTTP_201_CREATED,
    summary="리뷰 작성",
    description="영화에 리뷰를 작성합니다. 평점은 0.0 ~ 10.0 입니다.",
)
async def create_review(
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    return await review_service.create_review(review_data, current_user.user_id)


@router.put(
    "/{review_id}",
    response_model=Review,
    summary="리뷰 수정",
    description="자신의 리뷰를 수정합니다.",
)
async def update_review(
    review_data: ReviewUpdate,
    review_id: int = Path(description="리뷰 ID"),
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    return await review_service.update_review(review_id, review_data, current_user.user_id)


@router.delete(
    "/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="리뷰 삭제",
    description="자신의 리뷰를 삭제합니다. 관리자는 모든 리뷰를 삭제할 수 있습니다.",
)
async def delete_review(
    review_id: int = Path(description="리뷰 ID"),
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    await review_service.delete_review(review_id, current_user.user_id, current_user.is_admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{review_id}/like",
    response_model=Review,
    summary="리뷰 좋아요",
)
async def like_review(
    review_id: int = Path(description="리뷰 ID"),
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    return await review_service.like_review(review_id, current_user.user_id)


@router.delete(
    "/{review_id}/like",
    response_model=Review,
    summary="리뷰 좋아요 취소",
)
async def unlike_review(
    review_id: int = Path(description="리뷰 ID"),
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    return await review_service.unlike_review(review_id, current_user.user_id)
