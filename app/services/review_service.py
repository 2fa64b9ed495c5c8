# app/services/review_service.py

import logging
from typing import Dict, List, Optional, Set
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func, and_, desc
from sqlalchemy.exc import SQLAlchemyError
from app.models.review import ReviewModel
from app.models.review_like import ReviewLikeModel
from app.models.movie import MovieModel
from app.models.user import UserModel
from app.schemas.review import Review, ReviewCreate, ReviewUpdate, ReviewPage
from app.core.exceptions import NotFoundException, PermissionDeniedException

logger = logging.getLogger(__name__)


class ReviewService:

    def __init__(self, db: Session):
        self.db = db

    def _get_review_model(self, review_id: int) -> ReviewModel:
        review_model = self.db.get(ReviewModel, review_id)
        if not review_model:
            raise NotFoundException(f"리뷰를 찾을 수 없습니다: {review_id}")
        return review_model

    def _likes_count(self, review_ids: List[int]) -> Dict[int, int]:
        if not review_ids:
            return {}
        stmt = (
            select(ReviewLikeModel.review_id, func.count(ReviewLikeModel.user_id))
            .where(ReviewLikeModel.review_id.in_(review_ids))
            .group_by(ReviewLikeModel.review_id)
        )
        return dict(self.db.execute(stmt).all())

    def _liked_by(self, review_ids: List[int], user_id: Optional[int]) -> Set[int]:
        if not review_ids or user_id is None:
            return set()
        stmt = select(ReviewLikeModel.review_id).where(
            and_(
                ReviewLikeModel.user_id == user_id,
                ReviewLikeModel.review_id.in_(review_ids),
            )
        )
        return set(self.db.execute(stmt).scalars().all())

    def _build_review(
        self,
        review_model: ReviewModel,
        user_model: Optional[UserModel],
        likes_count: int,
        is_liked: bool,
        current_user_id: Optional[int],
    ) -> Review:
        return Review(
            review_id=review_model.review_id,
            movie_id=review_model.movie_id,
            user_id=review_model.user_id,
            rating=review_model.rating,
            title=review_model.title,
            content=review_model.content,
            likes_count=likes_count,
            is_liked=is_liked,
            is_author=current_user_id is not None and review_model.user_id == current_user_id,
            created_at=review_model.created_at,
            updated_at=review_model.updated_at,
            user_email=user_model.email if user_model else None,
            user_name=f"{user_model.first_name} {user_model.last_name}" if user_model else None,
        )

    def _single(self, review_model: ReviewModel, current_user_id: Optional[int]) -> Review:
        review_id = review_model.review_id
        return self._build_review(
            review_model,
            self.db.get(UserModel, review_model.user_id),
            self._likes_count([review_id]).get(review_id, 0),
            review_id in self._liked_by([review_id], current_user_id),
            current_user_id,
        )

    async def get_movie_reviews(
        self,
        movie_id: int,
        current_user_id: Optional[int] = None,
        page: int = 0,
        size: int = 20,
    ) -> ReviewPage:
        """영화별 리뷰 목록 (최신순, 조회 실패시 빈 목록)"""
        try:
            total = self.db.execute(
                select(func.count()).select_from(ReviewModel).where(ReviewModel.movie_id == movie_id)
            ).scalar_one()

            stmt = (
                select(ReviewModel, UserModel)
                .join(UserModel, ReviewModel.user_id == UserModel.user_id)
                .where(ReviewModel.movie_id == movie_id)
                .order_by(desc(ReviewModel.created_at), desc(ReviewModel.review_id))
                .offset(page * size)
                .limit(size)
            )
            rows = self.db.execute(stmt).all()

            review_ids = [review.review_id for review, _ in rows]
            likes = self._likes_count(review_ids)
            liked = self._liked_by(review_ids, current_user_id)

            reviews = [
                self._build_review(
                    review,
                    user,
                    likes.get(review.review_id, 0),
                    review.review_id in liked,
                    current_user_id,
                )
                for review, user in rows
            ]
            return ReviewPage(reviews=reviews, total=total, page=page, size=size)
        except SQLAlchemyError as e:
            logger.error("리뷰 목록 조회 실패 (movie_id=%s): %s", movie_id, e)
            return ReviewPage(reviews=[], total=0, page=page, size=size)

    async def create_review(self, review_data: ReviewCreate, user_id: int) -> Review:
        if not self.db.get(MovieModel, review_data.movie_id):
            raise NotFoundException(f"영화를 찾을 수 없습니다: {review_data.movie_id}")

        review_model = ReviewModel(
            movie_id=review_data.movie_id,
            user_id=user_id,
            rating=review_data.rating,
            title=review_data.title,
            content=review_data.content,
        )
        try:
            self.db.add(review_model)
            self.db.commit()
            self.db.refresh(review_model)
        except Exception:
            self.db.rollback()
            raise

        logger.info("리뷰 작성: review_id=%s, movie_id=%s", review_model.review_id, review_model.movie_id)
        return self._single(review_model, user_id)

    async def update_review(self, review_id: int, review_data: ReviewUpdate, user_id: int) -> Review:
        review_model = self._get_review_model(review_id)
        if review_model.user_id != user_id:
            raise PermissionDeniedException("본인의 리뷰만 수정할 수 있습니다")

        for field, value in review_data.model_dump(exclude_none=True).items():
            setattr(review_model, field, value)

        try:
            self.db.commit()
            self.db.refresh(review_model)
        except Exception:
            self.db.rollback()
            raise

        return self._single(review_model, user_id)

    async def delete_review(self, review_id: int, user_id: int, is_admin: bool = False) -> None:
        """리뷰 삭제 (작성자 또는 관리자)"""
        review_model = self._get_review_model(review_id)
        if review_model.user_id != user_id and not is_admin:
            raise PermissionDeniedException("본인의 리뷰만 삭제할 수 있습니다")

        try:
            self.db.execute(
                delete(ReviewLikeModel)
                .where(ReviewLikeModel.review_id == review_id)
                .execution_options(synchronize_session=False)
            )
            self.db.delete(review_model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("리뷰 삭제: review_id=%s (삭제 요청자 %s)", review_id, user_id)

    async def like_review(self, review_id: int, user_id: int) -> Review:
        """좋아요 (이미 누른 경우 그대로 유지)"""
        review_model = self._get_review_model(review_id)

        if not self.db.get(ReviewLikeModel, (user_id, review_id)):
            try:
                self.db.add(ReviewLikeModel(user_id=user_id, review_id=review_id))
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        return self._single(review_model, user_id)

    async def unlike_review(self, review_id: int, user_id: int) -> Review:
        review_model = self._get_review_model(review_id)

        like = self.db.get(ReviewLikeModel, (user_id, review_id))
        if like:
            try:
                self.db.delete(like)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        return self._single(review_model, user_id)
