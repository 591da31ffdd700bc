"""Pydantic models for the public response schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class LeagueSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    image_path: str | None = None


class TeamSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    image_path: str | None = None


class TeamScore(BaseModel):
    team_id: int | None = None
    score: int = 0


class FixtureScore(BaseModel):
    participant_id: int | None = None
    goals: int = 0


class ShapedMatch(BaseModel):
    """Live match as served to clients."""

    id: Any = None
    league_id: Any = None
    round: Any = "N/A"
    localteam_id: int | None = None
    visitorteam_id: int | None = None
    starting_at: Any = None
    status: str = "N/A"
    minute: int | None = None
    live: bool = False
    scores: list[TeamScore]
    participants: Any = None


class ShapedFixture(BaseModel):
    """Upcoming fixture as served to clients. Never live, always 0-0."""

    id: Any = None
    league_id: Any = None
    round: Any = None
    starting_at: Any = None
    status: str = "N/A"
    live: bool = False
    participants: Any = None
    scores: list[FixtureScore]
