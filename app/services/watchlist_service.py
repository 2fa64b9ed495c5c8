# app/services/watchlist_service.py

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, and_, desc
from app.models.watchlist import WatchlistModel, WatchlistStatus
from app.models.movie import MovieModel
from app.models.user import UserModel
from app.schemas.watchlist import (
    WatchlistEntry,
    WatchlistAdd,
    WatchlistDetailsUpdate,
    WatchlistPage,
)
from app.services.friendship_service import FriendshipService
from app.core.exceptions import ConflictException, NotFoundException, PermissionDeniedException

logger = logging.getLogger(__name__)


def _to_entry(watchlist: WatchlistModel, movie: Optional[MovieModel]) -> WatchlistEntry:
    return WatchlistEntry(
        watchlist_id=watchlist.watchlist_id,
        user_id=watchlist.user_id,
        movie_id=watchlist.movie_id,
        movie_title=movie.title if movie else None,
        movie_release_year=movie.release_year if movie else None,
        movie_poster_path=movie.poster_path if movie else None,
        status=watchlist.status,
        is_public=bool(watchlist.is_public),
        notes=watchlist.notes,
        added_at=watchlist.added_at,
        updated_at=watchlist.updated_at,
    )


class WatchlistService:

    def __init__(self, db: Session):
        self.db = db
        self.friendship_service = FriendshipService(db)

    def _get_own_entry(self, watchlist_id: int, user_id: int) -> WatchlistModel:
        watchlist = self.db.get(WatchlistModel, watchlist_id)
        if not watchlist:
            raise NotFoundException(f"왓치리스트 항목을 찾을 수 없습니다: {watchlist_id}")
        if watchlist.user_id != user_id:
            raise PermissionDeniedException("본인의 왓치리스트만 수정할 수 있습니다")
        return watchlist

    def _save(self, watchlist: WatchlistModel) -> WatchlistEntry:
        try:
            self.db.commit()
            self.db.refresh(watchlist)
        except Exception:
            self.db.rollback()
            raise
        return _to_entry(watchlist, self.db.get(MovieModel, watchlist.movie_id))

    async def add_to_watchlist(self, user_id: int, data: WatchlistAdd) -> WatchlistEntry:
        movie = self.db.get(MovieModel, data.movie_id)
        if not movie:
            raise NotFoundException(f"영화를 찾을 수 없습니다: {data.movie_id}")

        if await self.is_in_watchlist(user_id, data.movie_id):
            raise ConflictException("이미 왓치리스트에 있는 영화입니다")

        watchlist = WatchlistModel(
            user_id=user_id,
            movie_id=data.movie_id,
            status=data.status or WatchlistStatus.WANT_TO_WATCH,
        )
        self.db.add(watchlist)
        entry = self._save(watchlist)

        logger.info("왓치리스트 추가: user=%s, movie=%s, status=%s", user_id, data.movie_id, entry.status.value)
        return entry

    async def remove_from_watchlist(self, watchlist_id: int, user_id: int) -> None:
        watchlist = self._get_own_entry(watchlist_id, user_id)
        try:
            self.db.delete(watchlist)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("왓치리스트 삭제: %s", watchlist_id)

    async def update_status(
        self, watchlist_id: int, user_id: int, status: WatchlistStatus
    ) -> WatchlistEntry:
        watchlist = self._get_own_entry(watchlist_id, user_id)
        watchlist.status = status
        return self._save(watchlist)

    async def update_details(
        self, watchlist_id: int, user_id: int, data: WatchlistDetailsUpdate
    ) -> WatchlistEntry:
        """공개 여부, 메모 수정"""
        watchlist = self._get_own_entry(watchlist_id, user_id)
        if data.is_public is not None:
            watchlist.is_public = data.is_public
        if data.notes is not None:
            watchlist.notes = data.notes
        return self._save(watchlist)

    async def get_watchlist(
        self,
        user_id: int,
        status: Optional[WatchlistStatus] = None,
        page: int = 0,
        size: int = 20,
        public_only: bool = False,
    ) -> WatchlistPage:
        conditions = [WatchlistModel.user_id == user_id]
        if status is not None:
            conditions.append(WatchlistModel.status == status)
        if public_only:
            conditions.append(WatchlistModel.is_public == True)  # noqa: E712

        total = self.db.execute(
            select(func.count()).select_from(WatchlistModel).where(and_(*conditions))
        ).scalar_one()

        stmt = (
            select(WatchlistModel, MovieModel)
            .join(MovieModel, WatchlistModel.movie_id == MovieModel.movie_id)
            .where(and_(*conditions))
            .order_by(desc(WatchlistModel.added_at), desc(WatchlistModel.watchlist_id))
            .offset(page * size)
            .limit(size)
        )
        entries = [_to_entry(watchlist, movie) for watchlist, movie in self.db.execute(stmt).all()]
        return WatchlistPage(entries=entries, total=total, page=page, size=size)

    async def is_in_watchlist(self, user_id: int, movie_id: int) -> bool:
        stmt = select(WatchlistModel.watchlist_id).where(
            and_(WatchlistModel.user_id == user_id, WatchlistModel.movie_id == movie_id)
        )
        return self.db.execute(stmt).first() is not None

    async def get_watchlist_count(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(WatchlistModel).where(WatchlistModel.user_id == user_id)
        return self.db.execute(stmt).scalar_one()

    async def get_friend_watchlist(
        self, user_id: int, friend_id: int, page: int = 0, size: int = 20
    ) -> WatchlistPage:
        """친구의 공개 왓치리스트 (친구만 조회 가능)"""
        if not await self.friendship_service.are_friends(user_id, friend_id):
            raise PermissionDeniedException("친구의 왓치리스트만 볼 수 있습니다")
        return await self.get_watchlist(friend_id, page=page, size=size, public_only=True)

    async def get_friends_watching(self, user_id: int, movie_id: int) -> List[str]:
        """이 영화를 공개 왓치리스트에 담은 친구 이름"""
        friend_ids = await self.friendship_service.get_friend_ids(user_id)
        if not friend_ids:
            return []

        stmt = (
            select(UserModel.first_name, UserModel.last_name)
            .join(WatchlistModel, WatchlistModel.user_id == UserModel.user_id)
            .where(
                and_(
                    WatchlistModel.movie_id == movie_id,
                    WatchlistModel.user_id.in_(friend_ids),
                    WatchlistModel.is_public == True,  # noqa: E712
                )
            )
            .order_by(UserModel.first_name)
        )
        return [f"{first} {last}" for first, last in self.db.execute(stmt).all()]
