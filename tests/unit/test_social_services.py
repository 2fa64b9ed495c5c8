import pytest
from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
    PermissionDeniedException,
)
from app.models.watchlist import WatchlistStatus
from app.schemas.watchlist import WatchlistAdd, WatchlistDetailsUpdate
from app.services.friendship_service import FriendshipService
from app.services.watchlist_service import WatchlistService


@pytest.fixture
def friendship_service(db_session):
    return FriendshipService(db_session)


@pytest.fixture
def watchlist_service(db_session):
    return WatchlistService(db_session)


@pytest.mark.asyncio
async def test_friendship_is_symmetric(friendship_service, make_user):
    alice = make_user("alice@example.com", first_name="Alice")
    bob = make_user("bob@example.com", first_name="Bob")

    await friendship_service.add_friend(alice.user_id, bob.user_id)

    assert await friendship_service.are_friends(bob.user_id, alice.user_id)
    assert [f.email for f in await friendship_service.get_friends(bob.user_id)] == ["alice@example.com"]

    with pytest.raises(ConflictException):
        await friendship_service.add_friend(bob.user_id, alice.user_id)

    await friendship_service.remove_friend(bob.user_id, alice.user_id)
    assert not await friendship_service.are_friends(alice.user_id, bob.user_id)


@pytest.mark.asyncio
async def test_cannot_befriend_self_or_missing_user(friendship_service, make_user):
    alice = make_user("alice@example.com")

    with pytest.raises(BadRequestException):
        await friendship_service.add_friend(alice.user_id, alice.user_id)
    with pytest.raises(NotFoundException):
        await friendship_service.add_friend(alice.user_id, 999)


@pytest.mark.asyncio
async def test_watchlist_add_defaults_and_rejects_duplicates(watchlist_service, make_movie, make_user):
    user = make_user("user@example.com")
    movie = make_movie(title="Alien")

    entry = await watchlist_service.add_to_watchlist(user.user_id, WatchlistAdd(movie_id=movie.movie_id))

    assert entry.status == WatchlistStatus.WANT_TO_WATCH
    assert entry.is_public is False
    assert entry.movie_title == "Alien"
    assert await watchlist_service.is_in_watchlist(user.user_id, movie.movie_id)

    with pytest.raises(ConflictException):
        await watchlist_service.add_to_watchlist(user.user_id, WatchlistAdd(movie_id=movie.movie_id))


@pytest.mark.asyncio
async def test_watchlist_status_filter_and_count(watchlist_service, make_movie, make_user):
    user = make_user("user@example.com")
    first = make_movie(title="Alien")
    second = make_movie(title="Aliens")

    entry = await watchlist_service.add_to_watchlist(user.user_id, WatchlistAdd(movie_id=first.movie_id))
    await watchlist_service.add_to_watchlist(
        user.user_id, WatchlistAdd(movie_id=second.movie_id, status=WatchlistStatus.WATCHING)
    )
    await watchlist_service.update_status(entry.watchlist_id, user.user_id, WatchlistStatus.WATCHED)

    watched = await watchlist_service.get_watchlist(user.user_id, WatchlistStatus.WATCHED)

    assert [e.movie_title for e in watched.entries] == ["Alien"]
    assert await watchlist_service.get_watchlist_count(user.user_id) == 2


@pytest.mark.asyncio
async def test_watchlist_entry_owner_only(watchlist_service, make_movie, make_user):
    owner = make_user("owner@example.com")
    other = make_user("other@example.com")
    movie = make_movie()
    entry = await watchlist_service.add_to_watchlist(owner.user_id, WatchlistAdd(movie_id=movie.movie_id))

    with pytest.raises(PermissionDeniedException):
        await watchlist_service.remove_from_watchlist(entry.watchlist_id, other.user_id)

    await watchlist_service.remove_from_watchlist(entry.watchlist_id, owner.user_id)
    assert await watchlist_service.get_watchlist_count(owner.user_id) == 0


@pytest.mark.asyncio
async def test_friend_watchlist_shows_public_entries_to_friends(
    watchlist_service, friendship_service, make_movie, make_user
):
    alice = make_user("alice@example.com", first_name="Alice", last_name="Smith")
    bob = make_user("bob@example.com")
    stranger = make_user("stranger@example.com")
    shared = make_movie(title="Shared")
    private = make_movie(title="Private")

    public_entry = await watchlist_service.add_to_watchlist(alice.user_id, WatchlistAdd(movie_id=shared.movie_id))
    await watchlist_service.update_details(
        public_entry.watchlist_id, alice.user_id, WatchlistDetailsUpdate(is_public=True, notes="Tonight")
    )
    await watchlist_service.add_to_watchlist(alice.user_id, WatchlistAdd(movie_id=private.movie_id))
    await friendship_service.add_friend(bob.user_id, alice.user_id)

    page = await watchlist_service.get_friend_watchlist(bob.user_id, alice.user_id)

    assert [e.movie_title for e in page.entries] == ["Shared"]
    assert page.entries[0].notes == "Tonight"
    assert await watchlist_service.get_friends_watching(bob.user_id, shared.movie_id) == ["Alice Smith"]
    assert await watchlist_service.get_friends_watching(bob.user_id, private.movie_id) == []

    with pytest.raises(PermissionDeniedException):
        await watchlist_service.get_friend_watchlist(stranger.user_id, alice.user_id)
