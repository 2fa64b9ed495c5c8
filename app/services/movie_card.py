# app/services/movie_card.py

import re
from decimal import Decimal
from typing import List, Optional
from app.models.movie import MovieModel
from app.schemas.search import MovieCard

UNKNOWN = "Unknown"

# 평점 기준 투표 수 미만이면 IMDB 평점이 더 신뢰할 만함
IMDB_PREFERRED_BELOW_VOTES = 1000

_GENRE_STRIP_PATTERN = re.compile(r"[\[\]'\"]")


def _is_placeholder(value: Optional[str]) -> bool:
    return value is None or value.strip() == "" or value.strip().lower() == UNKNOWN.lower()


class MovieCardProjector:
    """DB 영화 레코드를 화면 표시용 카드로 변환 (부수효과 없음)"""

    def project(self, movie: MovieModel) -> MovieCard:
        rating, is_imdb_rated = self._select_rating(movie)

        return MovieCard(
            id=movie.movie_id,
            title=movie.title if movie.title is not None else "Unknown Title",
            original_title=movie.original_title,
            release_year=int(movie.release_year) if movie.release_year is not None else None,
            rating=rating,
            is_imdb_rated=is_imdb_rated,
            imdb_rating=movie.imdb_rating,
            vote_count=movie.vote_count if movie.vote_count is not None else 0,
            popularity=movie.popularity if movie.popularity is not None else Decimal("0"),
            poster_path=movie.poster_path,
            overview=movie.overview,
            genres=self.parse_genres(movie.genres_list),
            director=UNKNOWN if _is_placeholder(movie.director) else movie.director,
            main_stars=self._main_stars(movie),
            runtime=movie.runtime if movie.runtime is not None and movie.runtime > 0 else 0,
        )

    def _select_rating(self, movie: MovieModel):
        """표시 평점 선택: 투표 수가 적으면 IMDB, 아니면 자체 평점"""
        if (
            movie.imdb_rating is not None
            and movie.imdb_rating > 0
            and (movie.vote_count is None or movie.vote_count < IMDB_PREFERRED_BELOW_VOTES)
        ):
            return Decimal(movie.imdb_rating), True

        if movie.vote_average is None or movie.vote_average == 0:
            return Decimal("0"), False
        return Decimal(movie.vote_average), False

    @staticmethod
    def parse_genres(genres_list: Optional[str]) -> List[str]:
        if not genres_list:
            return [UNKNOWN]

        genres = [
            genre.strip()
            for genre in _GENRE_STRIP_PATTERN.sub("", genres_list).split(",")
        ]
        genres = [genre for genre in genres if genre and genre.lower() != UNKNOWN.lower()]
        return genres or [UNKNOWN]

    @staticmethod
    def _main_stars(movie: MovieModel) -> List[str]:
        stars = (movie.star1, movie.star2, movie.star3, movie.star4)
        return [star for star in stars if not _is_placeholder(star)]
