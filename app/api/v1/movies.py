# app/api/v1/movies.py

import logging
from fastapi import APIRouter, HTTPException, Depends, File, Path, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.movie import Movie, MovieUpdate, MovieStats, ImportResult
from app.schemas.search import MovieCard, MovieSearchRequest, MovieSearchResponse
from app.schemas.user import User
from app.services.movie_search_service import MovieSearchService
from app.services.movie_service import MovieService
from app.services.csv_service import CsvService
from app.core.config import get_settings
from app.core.dependencies import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter()


def get_movie_search_service(db: Session = Depends(get_db)) -> MovieSearchService:
    return MovieSearchService(db)


def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(db)


def get_csv_service(db: Session = Depends(get_db)) -> CsvService:
    return CsvService(db)


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post(
    "/search",
    response_model=MovieSearchResponse,
    summary="영화 검색",
    description="제목, 줄거리, 장르, 평점, 연도, 상영시간, 감독, 배우 조건을 조합해 영화를 검색합니다.",
)
async def search_movies(
    request: MovieSearchRequest,
    search_service: MovieSearchService = Depends(get_movie_search_service),
):
    try:
        return await search_service.search(request)
    except SQLAlchemyError:
        logger.exception("영화 검색 중 DB 오류")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="영화 검색 중 데이터베이스 오류가 발생했습니다",
        )


@router.post(
    "/export",
    summary="검색 결과 CSV 내보내기",
    description="검색 조건에 맞는 영화를 CSV로 내보냅니다. size 를 지정하지 않으면 최대 10000건입니다.",
)
async def export_search_results(
    request: MovieSearchRequest,
    search_service: MovieSearchService = Depends(get_movie_search_service),
    csv_service: CsvService = Depends(get_csv_service),
):
    if "size" not in request.model_fields_set:
        request = request.model_copy(update={"size": get_settings().export_default_size})

    try:
        page = await search_service.search_records(request)
    except SQLAlchemyError:
        logger.exception("CSV 내보내기 검색 중 DB 오류")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="영화 검색 중 데이터베이스 오류가 발생했습니다",
        )

    return _csv_response(csv_service.export_movies(page.movies), "movies_export.csv")


@router.get(
    "/export/all",
    summary="전체 영화 CSV 내보내기 (관리자)",
    description="등록된 모든 영화를 CSV로 내보냅니다.",
)
async def export_all_movies(
    admin: User = Depends(get_current_admin),
    movie_service: MovieService = Depends(get_movie_service),
    csv_service: CsvService = Depends(get_csv_service),
):
    movies = await movie_service.get_all_movies()
    logger.info("전체 영화 내보내기 요청: %s (%d건)", admin.email, len(movies))
    return _csv_response(csv_service.export_movies(movies), "all_movies.csv")


@router.post(
    "/import",
    response_model=ImportResult,
    summary="CSV 영화 가져오기 (관리자)",
    description="CSV 파일을 업로드해 영화를 일괄 등록합니다.",
)
async def import_movies(
    file: UploadFile = File(description="영화 CSV 파일"),
    admin: User = Depends(get_current_admin),
    csv_service: CsvService = Depends(get_csv_service),
):
    logger.info("CSV 가져오기 요청: %s (%s)", admin.email, file.filename)
    content = await file.read()
    return await csv_service.import_movies(content)


@router.get(
    "/admin/stats",
    response_model=MovieStats,
    summary="영화 통계 (관리자)",
    description="전체 영화 수와 장르별 영화 수를 조회합니다.",
)
async def get_movie_stats(
    admin: User = Depends(get_current_admin),
    movie_service: MovieService = Depends(get_movie_service),
):
    return await movie_service.get_movie_stats()


@router.get(
    "/{movie_id}",
    response_model=MovieCard,
    summary="영화 상세 조회",
    description="영화 ID로 영화 카드 정보를 조회합니다.",
)
async def get_movie(
    movie_id: int = Path(description="영화 ID"),
    movie_service: MovieService = Depends(get_movie_service),
):
    return await movie_service.get_movie_card(movie_id)


@router.put(
    "/{movie_id}",
    response_model=Movie,
    summary="영화 수정 (관리자)",
    description="전달된 항목만 수정합니다.",
)
async def update_movie(
    movie_data: MovieUpdate,
    movie_id: int = Path(description="영화 ID"),
    admin: User = Depends(get_current_admin),
    movie_service: MovieService = Depends(get_movie_service),
):
    return await movie_service.update_movie(movie_id, movie_data)


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="영화 삭제 (관리자)",
    description="영화와 관련 리뷰, 리뷰 좋아요, 왓치리스트를 함께 삭제합니다.",
)
async def delete_movie(
    movie_id: int = Path(description="영화 ID"),
    admin: User = Depends(get_current_admin),
    movie_service: MovieService = Depends(get_movie_service),
):
    await movie_service.delete_movie(movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
