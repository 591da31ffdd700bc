"""Read-only views over the cache. Never touches the network."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from footproxy.api.models import LeagueSummary, ShapedFixture, ShapedMatch, TeamSummary
from footproxy.services import cache as cache_keys
from footproxy.services.cache import TTLCache
from footproxy.services.shaper import shape_fixture, shape_match

log = logging.getLogger(__name__)

T = TypeVar("T")


def _shape_all(records: list[Any], shape: Callable[[dict], T], kind: str) -> list[T]:
    """Shape each record, dropping any that cannot be shaped."""
    shaped: list[T] = []
    for record in records:
        if not isinstance(record, dict):
            log.warning("Skipping non-object %s record", kind)
            continue
        try:
            shaped.append(shape(record))
        except ValueError as exc:
            log.warning("Skipping %s %s: %s", kind, record.get("id"), exc)
    return shaped


class QueryService:
    """Serves cached resources, shaping matches and fixtures per request."""

    def __init__(self, cache: TTLCache) -> None:
        self.cache = cache

    def _read(self, key: str) -> list[Any]:
        return self.cache.get(key) or []

    def get_live_scores(self) -> list[ShapedMatch]:
        return _shape_all(self._read(cache_keys.LIVE_SCORES), shape_match, "match")

    def get_fixtures(self) -> list[ShapedFixture]:
        return _shape_all(self._read(cache_keys.FIXTURES), shape_fixture, "fixture")

    def get_teams(self) -> list[TeamSummary]:
        return self._read(cache_keys.TEAMS)

    def get_leagues(self) -> list[LeagueSummary]:
        return self._read(cache_keys.LEAGUES)
