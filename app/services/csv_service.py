# app/services/csv_service.py

import csv
import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from app.models.movie import MovieModel
from app.schemas.movie import ImportResult
from app.core.exceptions import BadRequestException

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "id", "title", "release_year", "vote_average", "vote_count",
    "runtime", "director", "genres_list", "overview", "poster_path",
    "imdb_rating", "popularity", "star1", "star2", "star3", "star4",
]

# 헤더에 컬럼명이 없을 때 사용하는 위치 기반 순서
POSITIONAL_IMPORT_COLUMNS = [
    "title", "release_year", "vote_average", "vote_count", "runtime", "director",
    "genres_list", "overview", "poster_path", "imdb_rating",
    "star1", "star2", "star3", "star4",
]
REQUIRED_POSITIONAL_FIELDS = 6

BATCH_SIZE = 100


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _to_decimal(value: Optional[str]) -> Optional[Decimal]:
    cleaned = _clean(value)
    if cleaned is None:
        return None
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"숫자가 아닙니다: {cleaned}")
    # Infinity, NaN 은 저장할 수 없음
    if not number.is_finite():
        raise ValueError(f"유한한 숫자가 아닙니다: {cleaned}")
    return number


def _to_int(value: Optional[str]) -> Optional[int]:
    number = _to_decimal(value)
    return int(number) if number is not None else None


FIELD_PARSERS: Dict[str, Callable[[Optional[str]], object]] = {
    "title": _clean,
    "original_title": _clean,
    "release_year": _to_int,
    "vote_average": _to_decimal,
    "vote_count": _to_int,
    "runtime": _to_int,
    "director": _clean,
    "genres_list": _clean,
    "overview": _clean,
    "poster_path": _clean,
    "imdb_rating": _to_decimal,
    "popularity": _to_decimal,
    "star1": _clean,
    "star2": _clean,
    "star3": _clean,
    "star4": _clean,
    "cast_list": _clean,
}


class CsvService:

    def __init__(self, db: Session):
        self.db = db

    async def import_movies(self, content: bytes) -> ImportResult:
        """CSV 파일 내용을 영화로 저장 (100건 단위로 커밋)"""
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise BadRequestException("CSV 파일은 UTF-8 인코딩이어야 합니다")
        reader = csv.reader(io.StringIO(text))

        header = next(reader, None)
        if header is None:
            raise BadRequestException("CSV 파일이 비어 있습니다")

        columns = [column.strip().lower() for column in header]
        by_name = "title" in columns
        logger.info("CSV 가져오기 시작 (헤더: %s, 컬럼명 기준: %s)", header, by_name)

        batch: List[MovieModel] = []
        errors: List[str] = []
        success_count = 0
        line_number = 1

        for row in reader:
            line_number += 1
            if not any(field.strip() for field in row):
                continue

            try:
                values = dict(zip(columns, row)) if by_name else self._positional(row)
                batch.append(self._build_movie(values))
                success_count += 1
            except ValueError as e:
                errors.append(f"Line {line_number}: {e}")
                logger.warning("CSV %d번째 줄 파싱 실패: %s", line_number, e)
                continue

            if len(batch) >= BATCH_SIZE:
                self._save_batch(batch)
                batch = []

        if batch:
            self._save_batch(batch)

        result = ImportResult(
            success_count=success_count,
            error_count=len(errors),
            total_lines=line_number,
            errors=errors,
        )
        logger.info("CSV 가져오기 완료: %s", result.summary)
        return result

    def _positional(self, row: List[str]) -> Dict[str, str]:
        if len(row) < REQUIRED_POSITIONAL_FIELDS:
            raise ValueError(f"필드가 부족합니다 (최소 {REQUIRED_POSITIONAL_FIELDS}개 필요)")
        return dict(zip(POSITIONAL_IMPORT_COLUMNS, row))

    def _build_movie(self, values: Dict[str, str]) -> MovieModel:
        fields = {}
        for name, parser in FIELD_PARSERS.items():
            if name not in values:
                continue
            try:
                fields[name] = parser(values[name])
            except ValueError as e:
                raise ValueError(f"{name} 값 오류 ({e})")
        if not fields.get("title"):
            raise ValueError("제목이 없습니다")

        fields.setdefault("popularity", None)
        if fields["popularity"] is None:
            fields["popularity"] = Decimal("0")
        return MovieModel(adult=False, status="Released", **fields)

    def _save_batch(self, batch: List[MovieModel]):
        try:
            self.db.add_all(batch)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("영화 %d건 저장", len(batch))

    def export_movies(self, movies: Iterable[MovieModel]) -> str:
        """영화 목록을 CSV 문자열로 변환"""
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS)

        count = 0
        for movie in movies:
            writer.writerow([self._format(movie, column) for column in EXPORT_COLUMNS])
            count += 1

        logger.info("CSV 내보내기 완료: %d건", count)
        return output.getvalue()

    @staticmethod
    def _format(movie: MovieModel, column: str) -> str:
        value = movie.movie_id if column == "id" else getattr(movie, column)
        return "" if value is None else str(value)
