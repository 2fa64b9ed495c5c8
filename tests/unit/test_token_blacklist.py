import pytest
from datetime import datetime, timedelta, timezone
from app.services.token_blacklist_service import TokenBlacklist
from app.services.scheduler_service import SchedulerService


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


def test_token_blocked_until_expiry(clock):
    blacklist = TokenBlacklist(clock)
    blacklist.add("token-a", clock.now + timedelta(hours=1))

    assert blacklist.contains("token-a")
    assert not blacklist.contains("token-b")

    clock.advance(hours=2)

    assert not blacklist.contains("token-a")
    assert len(blacklist) == 0


def test_sweep_removes_only_expired(clock):
    blacklist = TokenBlacklist(clock)
    blacklist.add("short", clock.now + timedelta(minutes=10))
    blacklist.add("long", clock.now + timedelta(days=1))

    clock.advance(minutes=30)

    assert blacklist.sweep() == 1
    assert len(blacklist) == 1
    assert blacklist.contains("long")


def test_scheduler_sweeps_blacklist(clock):
    blacklist = TokenBlacklist(clock)
    blacklist.add("expired", clock.now - timedelta(seconds=1))

    removed = SchedulerService(blacklist, interval_seconds=1).sweep_expired_tokens()

    assert removed == 1
    assert len(blacklist) == 0
