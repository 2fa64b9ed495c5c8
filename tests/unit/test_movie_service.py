import pytest
from decimal import Decimal
from app.core.exceptions import BadRequestException, NotFoundException
from app.models.movie import MovieModel
from app.models.review import ReviewModel
from app.models.review_like import ReviewLikeModel
from app.models.watchlist import WatchlistModel
from app.schemas.movie import MovieUpdate
from app.services.csv_service import CsvService
from app.services.movie_service import MovieService


@pytest.fixture
def movie_service(db_session):
    return MovieService(db_session)


@pytest.mark.asyncio
async def test_update_applies_only_supplied_fields(movie_service, make_movie):
    movie = make_movie(title="Old", director="Someone", runtime=100)

    updated = await movie_service.update_movie(movie.movie_id, MovieUpdate(title="New", runtime=110))

    assert updated.title == "New"
    assert updated.runtime == 110
    assert updated.director == "Someone"


@pytest.mark.asyncio
async def test_missing_movie_raises(movie_service):
    with pytest.raises(NotFoundException):
        await movie_service.get_movie_card(12345)


@pytest.mark.asyncio
async def test_delete_cascades_dependents(movie_service, db_session, make_movie, make_user):
    movie = make_movie()
    user = make_user("user@example.com")
    review = ReviewModel(movie_id=movie.movie_id, user_id=user.user_id, content="Good")
    db_session.add_all([review, WatchlistModel(user_id=user.user_id, movie_id=movie.movie_id)])
    db_session.commit()
    db_session.add(ReviewLikeModel(user_id=user.user_id, review_id=review.review_id))
    db_session.commit()

    await movie_service.delete_movie(movie.movie_id)

    assert db_session.query(MovieModel).count() == 0
    assert db_session.query(ReviewModel).count() == 0
    assert db_session.query(ReviewLikeModel).count() == 0
    assert db_session.query(WatchlistModel).count() == 0


@pytest.mark.asyncio
async def test_stats_count_canonical_genres(movie_service, make_movie):
    make_movie(genres_list="Action, Science Fiction")
    make_movie(genres_list="Drama")

    stats = await movie_service.get_movie_stats()

    assert stats.total_movies == 2
    assert stats.genre_counts["Action"] == 1
    assert stats.genre_counts["Science Fiction"] == 1
    assert stats.genre_counts["Horror"] == 0


@pytest.mark.asyncio
async def test_csv_import_positional_rows(db_session):
    content = (
        "Series_Title,Released_Year,Rating,Votes,Runtime,Director,Genre,Overview,Poster,IMDB,S1,S2,S3,S4\n"
        "Heat,1995,8.3,600000,170,Michael Mann,\"Crime, Drama\",Heist,/heat.jpg,8.3,Al Pacino,Robert De Niro,,\n"
        "Broken,1999\n"
        ",2000,5,5,90,Nobody,Drama,,,,,,,\n"
    ).encode("utf-8")

    result = await CsvService(db_session).import_movies(content)

    assert result.success_count == 1
    assert result.error_count == 2
    assert result.total_lines == 4

    movie = db_session.query(MovieModel).one()
    assert movie.title == "Heat"
    assert movie.runtime == 170
    assert movie.genres_list == "Crime, Drama"
    assert movie.star2 == "Robert De Niro"
    assert movie.adult is False
    assert movie.status == "Released"


@pytest.mark.asyncio
async def test_csv_import_by_header_names(db_session):
    content = "title,popularity,release_year\nAlien,42.5,1979\n".encode("utf-8")

    result = await CsvService(db_session).import_movies(content)

    assert result.success_count == 1
    movie = db_session.query(MovieModel).one()
    assert movie.release_year == 1979
    assert movie.popularity == Decimal("42.5")


@pytest.mark.asyncio
async def test_csv_import_empty_file(db_session):
    with pytest.raises(BadRequestException):
        await CsvService(db_session).import_movies(b"")


@pytest.mark.asyncio
async def test_csv_import_non_finite_number_is_line_error(db_session):
    content = (
        "title,release_year,vote_average\n"
        "Good,2000,7.0\n"
        "Bad,Infinity,7.0\n"
        "Also Good,2001,6.0\n"
        "Worse,2002,NaN\n"
    ).encode("utf-8")

    result = await CsvService(db_session).import_movies(content)

    assert result.success_count == 2
    assert result.error_count == 2
    assert result.errors[0].startswith("Line 3: release_year")
    assert result.errors[1].startswith("Line 5: vote_average")
    assert sorted(m.title for m in db_session.query(MovieModel).all()) == ["Also Good", "Good"]


@pytest.mark.asyncio
async def test_csv_import_rejects_non_utf8(db_session):
    with pytest.raises(BadRequestException):
        await CsvService(db_session).import_movies(b"title\n\xff\xfe bad\n")

    assert db_session.query(MovieModel).count() == 0


def test_csv_export_columns(make_movie):
    movie = make_movie(title="Heat", release_year=1995, director="Michael Mann")

    content = CsvService(None).export_movies([movie])
    header, row = content.strip().split("\n")

    assert header.startswith("id,title,release_year,vote_average")
    assert row.startswith(f"{movie.movie_id},Heat,1995,")
    assert "Michael Mann" in row
