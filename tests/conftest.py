# Area: Test Support
"""Shared fixtures: a controllable clock, short-window policy and answer list."""

from datetime import datetime, timedelta, timezone

import pytest

from wordleoff.answers import FixedAnswerSource
from wordleoff.policy import SessionPolicy


START = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

ANSWERS = [
    "SLATE", "CRANE", "TRAIN", "PLANT", "GHOST", "RIVER", "STONE", "PIANO",
    "TIGER", "OCEAN", "MAPLE", "FROST", "BRICK", "CLOUD", "EAGLE", "LEMON",
]


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def answers():
    return FixedAnswerSource(ANSWERS)


@pytest.fixture
def policy():
    """Test-sized windows: 10 minute sessions, 8 second connections."""
    return SessionPolicy(
        max_players=4,
        session_expire_minutes=10,
        connection_expire_seconds=8,
        past_answers_max_size=5,
        restart_grace_seconds=60,
    )
