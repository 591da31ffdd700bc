"""Tests for the HTTP routes."""

from __future__ import annotations

import asyncio
import time

import pytest
from fastapi.testclient import TestClient

from footproxy.api.models import LeagueSummary, TeamSummary
from footproxy.services.refresh import RefreshScheduler
from footproxy.web.app import create_app


def _wait_for(condition, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while not condition():
        assert time.monotonic() < deadline
        time.sleep(0.01)


@pytest.fixture
def scheduler(settings, mock_client, cache) -> RefreshScheduler:
    return RefreshScheduler(settings, client=mock_client, cache=cache)


@pytest.fixture
def http(settings, scheduler):
    app = create_app(settings, scheduler=scheduler, start_refresh=False)
    with TestClient(app) as client:
        yield client


def test_ping(http):
    response = http.get("/api/ping")
    assert response.status_code == 200
    assert response.text == "pong"


@pytest.mark.parametrize("resource", ["livescores", "fixtures", "teams", "leagues"])
def test_empty_cache_returns_empty_data(http, resource):
    response = http.get(f"/api/football/{resource}")
    assert response.status_code == 200
    assert response.json() == {"data": []}


def test_teams(http, cache):
    cache.set("teams", [TeamSummary(id=10, name="Arsenal", image_path="a.png")])
    response = http.get("/api/football/teams")
    assert response.json() == {
        "data": [{"id": 10, "name": "Arsenal", "image_path": "a.png"}]
    }


def test_leagues(http, cache):
    cache.set("leagues", [LeagueSummary(id=8, name="Premier League", image_path=None)])
    response = http.get("/api/football/leagues")
    assert response.json()["data"][0]["name"] == "Premier League"


def test_livescores_shape(http, cache, sample_match):
    cache.set("liveScores", [sample_match])
    match = http.get("/api/football/livescores").json()["data"][0]
    assert match["status"] == "LIVE"
    assert match["live"] is True
    assert match["round"] == "27"
    assert match["minute"] == 67
    assert match["scores"] == [
        {"team_id": 10, "score": 2},
        {"team_id": 20, "score": 1},
    ]
    assert match["participants"] == sample_match["participants"]


def test_fixtures_shape(http, cache, sample_fixture):
    cache.set("fixtures", [sample_fixture])
    fixture = http.get("/api/football/fixtures").json()["data"][0]
    assert fixture["status"] == "NS"
    assert fixture["live"] is False
    assert fixture["round"] == sample_fixture["round"]
    assert fixture["scores"] == [
        {"participant_id": 10, "goals": 0},
        {"participant_id": 20, "goals": 0},
    ]


def test_cors_allows_listed_origin(http):
    response = http.get(
        "/api/ping", headers={"Origin": "https://khelinfo-frontend.vercel.app"}
    )
    assert response.headers["access-control-allow-origin"] == (
        "https://khelinfo-frontend.vercel.app"
    )


def test_cors_rejects_unlisted_origin(http):
    response = http.get("/api/ping", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in response.headers


def test_lifespan_runs_scheduler(settings, mock_client, cache):
    mock_client.fetch_resource.return_value = {"data": []}
    scheduler = RefreshScheduler(settings, client=mock_client, cache=cache)
    app = create_app(settings, scheduler=scheduler)
    with TestClient(app) as client:
        assert scheduler.running
        _wait_for(lambda: mock_client.fetch_resource.await_count == 4)
        assert client.get("/api/football/teams").json() == {"data": []}
    assert not scheduler.running
    assert mock_client.fetch_resource.await_count == 4


def test_ping_answers_while_initial_fetch_pending(settings, mock_client, cache):
    release = asyncio.Event()

    async def hung_fetch(path, params=None):
        await release.wait()
        return {"data": []}

    mock_client.fetch_resource.side_effect = hung_fetch
    scheduler = RefreshScheduler(settings, client=mock_client, cache=cache)
    app = create_app(settings, scheduler=scheduler)

    started = time.monotonic()
    with TestClient(app) as client:
        response = client.get("/api/ping")
        assert response.text == "pong"
        assert client.get("/api/football/leagues").json() == {"data": []}
        assert time.monotonic() - started < 1
        _wait_for(lambda: mock_client.fetch_resource.await_count == 1)
    assert not scheduler.running


def test_unset_fields_left_out_of_livescores(http, cache, sample_match):
    del sample_match["periods"]
    sample_match["participants"] = sample_match["participants"][:1]
    cache.set("liveScores", [sample_match])

    match = http.get("/api/football/livescores").json()["data"][0]
    assert "minute" not in match
    assert "visitorteam_id" not in match
    assert match["scores"][1] == {"score": 0}
    # participants keep their own nulls
    assert match["participants"][0]["meta"]["winner"] is None


def test_numeric_starting_at_passed_through(http, cache, sample_fixture):
    cache.set("fixtures", [dict(sample_fixture, starting_at=1772377200)])
    fixture = http.get("/api/football/fixtures").json()["data"][0]
    assert fixture["starting_at"] == 1772377200
