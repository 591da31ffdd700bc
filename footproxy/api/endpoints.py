"""Typed fetch functions for the football data API."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from footproxy.api.client import FootballAPIClient, UpstreamError
from footproxy.api.models import LeagueSummary, TeamSummary

LIVESCORE_INCLUDES = ("scores", "participants", "state", "league")
FIXTURE_INCLUDES = ("participants", "league", "round", "state")


def _include_param(includes: tuple[str, ...]) -> dict[str, str]:
    return {"include": ";".join(includes)} if includes else {}


def _extract_data(body: Any, path: str) -> Any:
    if not isinstance(body, dict):
        raise UpstreamError(f"malformed body from {path}: expected an object")
    if "data" not in body:
        raise UpstreamError(
            str(body.get("message") or f"malformed body from {path}: missing data field")
        )
    return body["data"]


def _record_list(data: Any, path: str, *, allow_empty: bool) -> list:
    if data is None and allow_empty:
        return []
    if not isinstance(data, list):
        raise UpstreamError(f"malformed body from {path}: data is not a list")
    return data


def project_league(record: Any) -> LeagueSummary:
    """Copy id, name and image_path out of an upstream league."""
    if isinstance(record, LeagueSummary):
        record = record.model_dump()
    return LeagueSummary.model_validate(record)


def project_team(record: Any) -> TeamSummary:
    """Copy id, name and image_path out of an upstream team."""
    if isinstance(record, TeamSummary):
        record = record.model_dump()
    return TeamSummary.model_validate(record)


async def get_leagues(client: FootballAPIClient) -> list[LeagueSummary]:
    """Fetch all leagues and project them to summaries."""
    body = await client.fetch_resource("/leagues")
    records = _record_list(_extract_data(body, "/leagues"), "/leagues", allow_empty=False)
    try:
        return [project_league(r) for r in records]
    except ValidationError as exc:
        raise UpstreamError(f"malformed league record: {exc}") from exc


async def get_teams(client: FootballAPIClient) -> list[TeamSummary]:
    """Fetch all teams and project them to summaries."""
    body = await client.fetch_resource("/teams")
    records = _record_list(_extract_data(body, "/teams"), "/teams", allow_empty=False)
    try:
        return [project_team(r) for r in records]
    except ValidationError as exc:
        raise UpstreamError(f"malformed team record: {exc}") from exc


async def get_livescores(client: FootballAPIClient) -> list[dict]:
    """Fetch in-play matches, unshaped."""
    body = await client.fetch_resource(
        "/livescores", params=_include_param(LIVESCORE_INCLUDES)
    )
    return _record_list(
        _extract_data(body, "/livescores"), "/livescores", allow_empty=True
    )


async def get_fixtures(client: FootballAPIClient) -> list[dict]:
    """Fetch fixtures, unshaped."""
    body = await client.fetch_resource(
        "/fixtures", params=_include_param(FIXTURE_INCLUDES)
    )
    return _record_list(_extract_data(body, "/fixtures"), "/fixtures", allow_empty=True)
