"""Reshape raw upstream matches and fixtures into the public schema.

Upstream records are deeply nested and any level may be missing, so every
lookup here treats absence as a normal case: ids become None, goals 0,
labels "N/A" and the match minute None.
"""

from __future__ import annotations

from typing import Any

from footproxy.api.models import FixtureScore, ShapedFixture, ShapedMatch, TeamScore

NOT_AVAILABLE = "N/A"
LIVE_STATE = "live"
SECOND_HALF_PERIOD = "2hg"


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def find_participant(participants: Any, location: str) -> dict | None:
    """Return the participant tagged with meta.location == location."""
    for p in _as_list(participants):
        if _as_dict(_as_dict(p).get("meta")).get("location") == location:
            return p
    return None


def find_score(scores: Any, participant_id: Any) -> dict | None:
    if participant_id is None:
        return None
    for s in _as_list(scores):
        if _as_dict(s).get("participant_id") == participant_id:
            return s
    return None


def _goals(score: dict | None) -> Any:
    if score is None:
        return 0
    return score.get("goals") or 0


def _state(record: dict) -> Any:
    return _as_dict(record.get("state")).get("state")


def derive_status(record: dict) -> str:
    state = _state(record)
    return str(state).upper() if state else NOT_AVAILABLE


def derive_round(record: dict) -> Any:
    return _as_dict(record.get("round")).get("name") or NOT_AVAILABLE


def derive_minute(record: dict) -> int | None:
    for period in _as_list(record.get("periods")):
        period = _as_dict(period)
        if period.get("type") == SECOND_HALF_PERIOD:
            return period.get("minutes")
    return None


def _team_id(team: dict | None) -> Any:
    return team.get("id") if team else None


def shape_match(match: dict) -> ShapedMatch:
    """Turn one raw live match into a ShapedMatch."""
    participants = match.get("participants")
    home = find_participant(participants, "home")
    away = find_participant(participants, "away")
    home_id = _team_id(home)
    away_id = _team_id(away)
    scores = match.get("scores")

    return ShapedMatch(
        id=match.get("id"),
        league_id=match.get("league_id"),
        round=derive_round(match),
        localteam_id=home_id,
        visitorteam_id=away_id,
        starting_at=match.get("starting_at"),
        status=derive_status(match),
        minute=derive_minute(match),
        live=_state(match) == LIVE_STATE,
        scores=[
            TeamScore(team_id=home_id, score=_goals(find_score(scores, home_id))),
            TeamScore(team_id=away_id, score=_goals(find_score(scores, away_id))),
        ],
        participants=participants,
    )


def shape_fixture(fixture: dict) -> ShapedFixture:
    """Turn one raw fixture into a ShapedFixture.

    round is passed through as upstream sends it, unlike shape_match which
    only keeps the round name.
    """
    participants = fixture.get("participants")
    home_id = _team_id(find_participant(participants, "home"))
    away_id = _team_id(find_participant(participants, "away"))

    return ShapedFixture(
        id=fixture.get("id"),
        league_id=fixture.get("league_id"),
        round=fixture.get("round"),
        starting_at=fixture.get("starting_at"),
        status=derive_status(fixture),
        live=False,
        participants=participants,
        scores=[
            FixtureScore(participant_id=home_id, goals=0),
            FixtureScore(participant_id=away_id, goals=0),
        ],
    )
