"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from footproxy.config import Settings
from footproxy.services.cache import TTLCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(default_ttl=900, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_token="test_token")


@pytest.fixture
def mock_client():
    return AsyncMock()


def _participant(team_id: int, name: str, location: str) -> dict:
    return {
        "id": team_id,
        "name": name,
        "image_path": f"https://cdn.example.com/teams/{team_id}.png",
        "meta": {"location": location, "winner": None, "position": 1},
    }


@pytest.fixture
def sample_match() -> dict:
    """An in-play match as upstream returns it with all includes."""
    return {
        "id": 19134454,
        "league_id": 8,
        "starting_at": "2026-03-01 15:00:00",
        "participants": [
            _participant(10, "Arsenal", "home"),
            _participant(20, "Chelsea", "away"),
        ],
        "scores": [
            {"participant_id": 10, "goals": 2},
            {"participant_id": 20, "goals": 1},
        ],
        "state": {"id": 3, "state": "live"},
        "round": {"id": 339237, "name": "27"},
        "periods": [
            {"type": "1h", "minutes": 45},
            {"type": "2hg", "minutes": 67},
        ],
        "league": {"id": 8, "name": "Premier League"},
    }


@pytest.fixture
def sample_fixture() -> dict:
    """An upcoming fixture as upstream returns it with all includes."""
    return {
        "id": 19134460,
        "league_id": 8,
        "starting_at": "2026-03-08 17:30:00",
        "participants": [
            _participant(10, "Arsenal", "home"),
            _participant(20, "Chelsea", "away"),
        ],
        "state": {"id": 1, "state": "NS"},
        "round": {"id": 339238, "name": "28"},
    }
