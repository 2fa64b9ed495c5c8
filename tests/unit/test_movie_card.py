from decimal import Decimal
from app.models.movie import MovieModel
from app.services.movie_card import MovieCardProjector


def movie(**fields) -> MovieModel:
    values = {"movie_id": 1, "title": "Heat", "vote_average": Decimal("7.2")}
    values.update(fields)
    return MovieModel(**values)


def test_imdb_rating_used_for_low_vote_count():
    card = MovieCardProjector().project(movie(imdb_rating=Decimal("8.0"), vote_count=500))

    assert card.rating == Decimal("8.0")
    assert card.is_imdb_rated is True
    assert card.rating_source == "IMDB"


def test_store_rating_used_for_high_vote_count():
    card = MovieCardProjector().project(movie(imdb_rating=Decimal("8.0"), vote_count=5000))

    assert card.rating == Decimal("7.2")
    assert card.rating_source == "TMDb"


def test_no_ratings_project_zero():
    card = MovieCardProjector().project(movie(vote_average=None, imdb_rating=None))

    assert card.rating == Decimal("0")
    assert card.is_imdb_rated is False


def test_empty_genres_project_unknown():
    card = MovieCardProjector().project(movie(genres_list=""))

    assert card.genres == ["Unknown"]
    assert card.primary_genre == "Unknown"


def test_bracketed_genre_list_is_cleaned():
    card = MovieCardProjector().project(movie(genres_list="['Action', 'Crime', 'Unknown']"))

    assert card.genres == ["Action", "Crime"]


def test_placeholders_are_cleaned():
    card = MovieCardProjector().project(
        movie(
            title=None,
            director="unknown",
            star1="Al Pacino",
            star2="",
            star3="Unknown",
            star4="Robert De Niro",
            runtime=0,
        )
    )

    assert card.title == "Unknown Title"
    assert card.director == "Unknown"
    assert card.main_stars == ["Al Pacino", "Robert De Niro"]
    assert card.runtime == 0


def test_long_overview_is_shortened():
    card = MovieCardProjector().project(movie(overview="x" * 200, release_year=1995))

    assert card.short_overview == "x" * 147 + "..."
    assert card.display_title == "Heat (1995)"


def test_overview_at_limit_not_shortened():
    card = MovieCardProjector().project(movie(overview="y" * 150))

    assert card.short_overview == "y" * 150
