# app/api/v1/watchlist.py

from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.watchlist import WatchlistStatus
from app.schemas.watchlist import (
    WatchlistEntry,
    WatchlistAdd,
    WatchlistStatusUpdate,
    WatchlistDetailsUpdate,
    WatchlistPage,
)
from app.schemas.user import User
from app.services.watchlist_service import WatchlistService
from app.core.dependencies import get_current_user

router = APIRouter()


def get_watchlist_service(db: Session = Depends(get_db)) -> WatchlistService:
    return WatchlistService(db)


@router.post(
    "/",
    response_model=WatchlistEntry,
    status_code=status.HTTP_201_CREATED,
    summary="왓치리스트 추가",
    description="영화를 왓치리스트에 추가합니다. 상태를 지정하지 않으면 WANT_TO_WATCH 입니다.",
)
async def add_to_watchlist(
    data: WatchlistAdd,
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return await watchlist_service.add_to_watchlist(current_user.user_id, data)


@router.get(
    "/",
    response_model=WatchlistPage,
    summary="내 왓치리스트 조회",
)
async def get_my_watchlist(
    watch_status: Optional[WatchlistStatus] = Query(default=None, alias="status", description="시청 상태"),
    page: int = Query(default=0, ge=0, description="페이지 번호 (0부터)"),
    size: int = Query(default=20, ge=1, le=100, description="페이지 크기"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return await watchlist_service.get_watchlist(current_user.user_id, watch_status, page, size)


@router.get(
    "/check/{movie_id}",
    summary="왓치리스트 포함 여부",
)
async def check_in_watchlist(
    movie_id: int = Path(description="영화 ID"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    in_watchlist = await watchlist_service.is_in_watchlist(current_user.user_id, movie_id)
    return {"movie_id": movie_id, "in_watchlist": in_watchlist}


@router.get(
    "/count",
    summary="왓치리스트 개수",
)
async def get_watchlist_count(
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return {"count": await watchlist_service.get_watchlist_count(current_user.user_id)}


@router.get(
    "/friends/{friend_id}",
    response_model=WatchlistPage,
    summary="친구 왓치리스트 조회",
    description="친구가 공개한 왓치리스트 항목만 조회합니다.",
)
async def get_friend_watchlist(
    friend_id: int = Path(description="친구 ID"),
    page: int = Query(default=0, ge=0, description="페이지 번호 (0부터)"),
    size: int = Query(default=20, ge=1, le=100, description="페이지 크기"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return await watchlist_service.get_friend_watchlist(current_user.user_id, friend_id, page, size)


@router.get(
    "/movie/{movie_id}/friends",
    response_model=List[str],
    summary="이 영화를 담은 친구",
)
async def get_friends_watching(
    movie_id: int = Path(description="영화 ID"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return await watchlist_service.get_friends_watching(current_user.user_id, movie_id)


@router.patch(
    "/{watchlist_id}/status",
    response_model=WatchlistEntry,
    summary="시청 상태 변경",
)
async def update_watchlist_status(
    data: WatchlistStatusUpdate,
    watchlist_id: int = Path(description="왓치리스트 ID"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return await watchlist_service.update_status(watchlist_id, current_user.user_id, data.status)


@router.patch(
    "/{watchlist_id}",
    response_model=WatchlistEntry,
    summary="왓치리스트 항목 수정",
    description="친구 공개 여부와 메모를 수정합니다.",
)
async def update_watchlist_details(
    data: WatchlistDetailsUpdate,
    watchlist_id: int = Path(description="왓치리스트 ID"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    return await watchlist_service.update_details(watchlist_id, current_user.user_id, data)


@router.delete(
    "/{watchlist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="왓치리스트 삭제",
)
async def remove_from_watchlist(
    watchlist_id: int = Path(description="왓치리스트 ID"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    await watchlist_service.remove_from_watchlist(watchlist_id, current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
