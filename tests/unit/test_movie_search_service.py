import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError
from app.schemas.search import MovieSearchRequest
from app.services.movie_search_service import MovieSearchService, MoviePage, build_filter_summary
from app.services.search_predicates import SortResolver


def fixed_clock():
    return datetime(2024, 6, 1)


@pytest.fixture
def search_service(db_session):
    return MovieSearchService(db_session, clock=fixed_clock)


def titles(response):
    return [card.title for card in response.movies]


@pytest.mark.asyncio
async def test_dark_matter_scenario(search_service, make_movie):
    make_movie(title="Dark Matter", vote_average=Decimal("7.5"), genres_list="Science Fiction, Drama")
    make_movie(title="Dark Knight", vote_average=Decimal("6.0"), genres_list="Action, Crime")

    response = await search_service.search(
        MovieSearchRequest(query="dark", min_rating=7.0, genres=["sci-fi"], page=0, size=10)
    )

    assert titles(response) == ["Dark Matter"]
    assert response.total_results == 1
    assert response.total_pages == 1
    assert response.has_more_results is False
    assert response.search_query == "dark"
    assert response.result_summary == "1 movie found"


@pytest.mark.asyncio
async def test_mandatory_rules_exclude_adult_and_untitled(search_service, make_movie):
    make_movie(title="Family Film", adult=False)
    make_movie(title="Unflagged Film", adult=None)
    make_movie(title="Adult Film", adult=True)
    make_movie(title=None)

    response = await search_service.search(MovieSearchRequest())

    assert sorted(titles(response)) == ["Family Film", "Unflagged Film"]
    assert response.applied_filters == "No filters"


@pytest.mark.asyncio
async def test_genres_must_all_match(search_service, make_movie):
    make_movie(title="Both", genres_list="Action, Comedy")
    make_movie(title="Only Action", genres_list="Action, Drama")

    response = await search_service.search(MovieSearchRequest(genres=["action", "comedy"]))

    assert titles(response) == ["Both"]


@pytest.mark.asyncio
async def test_runtime_bound_excludes_missing_runtime(search_service, make_movie):
    make_movie(title="Short", runtime=80)
    make_movie(title="Zero", runtime=0)
    make_movie(title="Missing", runtime=None)
    make_movie(title="Long", runtime=150)

    response = await search_service.search(MovieSearchRequest(max_runtime=90))

    assert titles(response) == ["Short"]


@pytest.mark.asyncio
async def test_short_runtime_quick_filter(search_service, make_movie):
    make_movie(title="Short", runtime=85)
    make_movie(title="Long", runtime=130)

    response = await search_service.search(MovieSearchRequest(short_runtime=True))

    assert titles(response) == ["Short"]
    assert response.applied_filters == "Runtime ≤ 90 min, Short Runtime"


@pytest.mark.asyncio
async def test_recently_released_uses_clock(search_service, make_movie):
    make_movie(title="New", release_year=2020)
    make_movie(title="Old", release_year=2010)

    response = await search_service.search(MovieSearchRequest(recently_released=True))

    assert titles(response) == ["New"]


@pytest.mark.asyncio
async def test_director_excludes_unknown(search_service, make_movie):
    make_movie(title="Real", director="Michael Mann")
    make_movie(title="Placeholder", director="Unknown Mann")

    response = await search_service.search(MovieSearchRequest(director="mann"))

    assert titles(response) == ["Real"]


@pytest.mark.asyncio
async def test_actor_matches_any_cast_field(search_service, make_movie):
    make_movie(title="Starring", star2="Meg Ryan")
    make_movie(title="Cast", cast_list="Bill Pullman, Tom Hanks")
    make_movie(title="Nobody", star1="Someone Else")

    response = await search_service.search(
        MovieSearchRequest(actors=["tom hanks", "meg ryan"], sort_by="title", sort_direction="asc")
    )

    assert titles(response) == ["Cast", "Starring"]


@pytest.mark.asyncio
async def test_foreign_title_search(search_service, make_movie):
    make_movie(title="Amelie", original_title="Le Fabuleux Destin d'Amélie Poulain")
    make_movie(title="Spirited Away", original_title="Sen to Chihiro no Kamikakushi")

    plain = await search_service.search(MovieSearchRequest(query="chihiro"))
    foreign = await search_service.search(MovieSearchRequest(query="chihiro", search_foreign=True))

    assert titles(plain) == []
    assert titles(foreign) == ["Spirited Away"]


@pytest.mark.asyncio
async def test_sorting_and_reported_sort(search_service, make_movie):
    make_movie(title="B", release_year=2001)
    make_movie(title="A", release_year=1999)
    make_movie(title="C", release_year=2005)

    response = await search_service.search(MovieSearchRequest(sort_by="bogus", sort_direction="up"))
    by_year = await search_service.search(MovieSearchRequest(sort_by="Year", sort_direction="asc"))

    assert response.sorted_by == "popularity"
    assert response.sort_direction == "desc"
    assert titles(by_year) == ["A", "B", "C"]
    assert by_year.sorted_by == "year"


@pytest.mark.asyncio
async def test_pagination_metadata(search_service, make_movie):
    for i in range(45):
        make_movie(title=f"Movie {i:02d}", popularity=Decimal(i))

    first = await search_service.search(MovieSearchRequest(page=0, size=20))
    last = await search_service.search(MovieSearchRequest(page=2, size=20))

    assert first.total_pages == 3
    assert first.has_more_results is True
    assert len(first.movies) == 20
    assert first.movies[0].title == "Movie 44"
    assert last.has_more_results is False
    assert len(last.movies) == 5


def test_page_arithmetic_without_store():
    sort = SortResolver().resolve(None, None)
    request = MovieSearchRequest()

    page = MoviePage(movies=[], page=0, size=20, total=45, sort=sort, request=request)
    empty = MoviePage(movies=[], page=0, size=20, total=0, sort=sort, request=request)

    assert page.total_pages == 3
    assert page.has_more is True
    assert empty.total_pages == 0
    assert empty.has_more is False


@pytest.mark.asyncio
async def test_store_failure_propagates():
    db = MagicMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))
    service = MovieSearchService(db)

    with pytest.raises(OperationalError):
        await service.search(MovieSearchRequest(query="anything"))


def test_filter_summary_lists_supplied_filters():
    request = MovieSearchRequest(
        query="dark",
        genres=["Science Fiction"],
        min_rating=7.0,
        director="Nolan",
        actors=["Cillian Murphy"],
    )

    summary = build_filter_summary(request)

    assert summary == (
        "Query: 'dark', Genres: Science Fiction, Rating ≥ 7.0, "
        "Director: Nolan, Actors: Cillian Murphy"
    )


def test_filter_summary_skips_blank_list_entries():
    request = MovieSearchRequest(genres=["", "Drama", "  "], actors=[" ", "Unknown", "Meg Ryan"])

    assert build_filter_summary(request) == "Genres: Drama, Actors: Meg Ryan"


def test_filter_summary_all_blank_lists_is_no_filters():
    request = MovieSearchRequest(genres=[""], actors=["  "])

    assert build_filter_summary(request) == "No filters"
