# app/services/movie_service.py

import logging
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func
from app.models.movie import MovieModel
from app.models.review import ReviewModel
from app.models.review_like import ReviewLikeModel
from app.models.watchlist import WatchlistModel
from app.schemas.movie import Movie, MovieUpdate, MovieStats
from app.schemas.search import MovieCard
from app.services.movie_card import MovieCardProjector
from app.services.search_filters import GenreNormalizer
from app.core.exceptions import NotFoundException

logger = logging.getLogger(__name__)


class MovieService:

    def __init__(self, db: Session):
        self.db = db
        self.card_projector = MovieCardProjector()

    def _get_movie_model(self, movie_id: int) -> MovieModel:
        movie_model = self.db.get(MovieModel, movie_id)
        if not movie_model:
            raise NotFoundException(f"영화를 찾을 수 없습니다: {movie_id}")
        return movie_model

    async def get_movie_card(self, movie_id: int) -> MovieCard:
        """영화 상세 카드 조회"""
        logger.info("영화 상세 조회: %s", movie_id)
        return self.card_projector.project(self._get_movie_model(movie_id))

    async def get_all_movies(self) -> List[MovieModel]:
        stmt = select(MovieModel).order_by(MovieModel.movie_id)
        return list(self.db.execute(stmt).scalars().all())

    async def update_movie(self, movie_id: int, movie_data: MovieUpdate) -> Movie:
        """관리자 영화 수정 (전달된 값만 반영)"""
        logger.info("영화 수정: %s", movie_id)
        movie_model = self._get_movie_model(movie_id)

        updates = movie_data.model_dump(exclude_none=True)
        for field, value in updates.items():
            setattr(movie_model, field, value)

        try:
            self.db.commit()
            self.db.refresh(movie_model)
        except Exception:
            self.db.rollback()
            raise

        logger.info("영화 수정 완료: %s (%s)", movie_id, ", ".join(updates) or "변경 없음")
        return Movie.model_validate(movie_model)

    async def delete_movie(self, movie_id: int) -> None:
        """영화 삭제 (리뷰, 리뷰 좋아요, 왓치리스트 함께 삭제)"""
        logger.info("영화 삭제: %s", movie_id)
        movie_model = self._get_movie_model(movie_id)

        review_ids = select(ReviewModel.review_id).where(ReviewModel.movie_id == movie_id)
        try:
            self.db.execute(
                delete(ReviewLikeModel)
                .where(ReviewLikeModel.review_id.in_(review_ids))
                .execution_options(synchronize_session=False)
            )
            self.db.execute(
                delete(ReviewModel)
                .where(ReviewModel.movie_id == movie_id)
                .execution_options(synchronize_session=False)
            )
            self.db.execute(
                delete(WatchlistModel)
                .where(WatchlistModel.movie_id == movie_id)
                .execution_options(synchronize_session=False)
            )
            self.db.delete(movie_model)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("영화 삭제 완료: %s", movie_id)

    async def get_movie_count(self) -> int:
        return self.db.execute(select(func.count()).select_from(MovieModel)).scalar_one()

    async def get_movie_count_by_genre(self, genre: str) -> int:
        stmt = (
            select(func.count())
            .select_from(MovieModel)
            .where(MovieModel.genres_list.ilike(f"%{genre.lower()}%"))
        )
        return self.db.execute(stmt).scalar_one()

    async def get_movie_stats(self) -> MovieStats:
        """관리자 대시보드용 통계"""
        genres = sorted(set(GenreNormalizer.GENRE_ALIASES.values()))
        genre_counts = {genre: await self.get_movie_count_by_genre(genre) for genre in genres}
        return MovieStats(total_movies=await self.get_movie_count(), genre_counts=genre_counts)

