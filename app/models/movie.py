# app/models/movie.py

from sqlalchemy import Column, BigInteger, Integer, Text, DECIMAL, Boolean, DateTime
from sqlalchemy.sql import func
from app.database import Base


class MovieModel(Base):
    __tablename__ = "movies"

    movie_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    title = Column(Text, nullable=True)
    original_title = Column(Text, nullable=True)
    overview = Column(Text, nullable=True)
    status = Column(Text, nullable=True)

    # 평점 정보
    vote_average = Column(DECIMAL(10, 2), nullable=True)
    vote_count = Column(BigInteger, nullable=True)
    imdb_rating = Column(DECIMAL(3, 1), nullable=True)
    popularity = Column(DECIMAL(10, 6), nullable=True)

    release_year = Column(Integer, nullable=True)
    runtime = Column(Integer, nullable=True)
    adult = Column(Boolean, nullable=True)
    poster_path = Column(Text, nullable=True)

    # 제작진 / 출연진 (비정규화)
    director = Column(Text, nullable=True)
    star1 = Column(Text, nullable=True)
    star2 = Column(Text, nullable=True)
    star3 = Column(Text, nullable=True)
    star4 = Column(Text, nullable=True)
    cast_list = Column(Text, nullable=True)

    # "Action, Adventure" 또는 "['Action', 'Adventure']" 형태
    genres_list = Column(Text, nullable=True)

    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<MovieModel(movie_id={self.movie_id}, title='{self.title}')>"
