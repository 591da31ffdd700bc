"""Periodic refresh of leagues, teams, live scores and fixtures into the cache."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from footproxy.api.client import FootballAPIClient, UpstreamError
from footproxy.api.endpoints import get_fixtures, get_leagues, get_livescores, get_teams
from footproxy.config import Settings
from footproxy.services import cache as cache_keys
from footproxy.services.cache import TTLCache, run_sweeper

log = logging.getLogger(__name__)

Fetcher = Callable[[FootballAPIClient], Awaitable[list[Any]]]


@dataclass(frozen=True)
class RefreshTask:
    name: str
    label: str
    cache_key: str
    interval: float
    fetch: Fetcher


class RefreshScheduler:
    """Runs one independent refresh loop per upstream resource.

    A failed refresh leaves whatever is cached for that key untouched.
    """

    def __init__(
        self,
        settings: Settings,
        client: FootballAPIClient | None = None,
        cache: TTLCache | None = None,
    ) -> None:
        self.settings = settings
        self._owns_client = client is None
        self.client = client if client is not None else FootballAPIClient(
            settings.api_token,
            base_url=settings.base_url,
            timeout=settings.upstream_timeout,
        )
        self.cache = cache if cache is not None else TTLCache(default_ttl=settings.cache_ttl)
        self.tasks: dict[str, RefreshTask] = {
            t.name: t
            for t in (
                RefreshTask("leagues", "Football Leagues", cache_keys.LEAGUES,
                            settings.leagues_refresh_interval, get_leagues),
                RefreshTask("teams", "Football Teams", cache_keys.TEAMS,
                            settings.teams_refresh_interval, get_teams),
                RefreshTask("live_scores", "Football LiveScores", cache_keys.LIVE_SCORES,
                            settings.livescores_refresh_interval, get_livescores),
                RefreshTask("fixtures", "Football Fixtures", cache_keys.FIXTURES,
                            settings.fixtures_refresh_interval, get_fixtures),
            )
        }
        self._in_flight: set[str] = set()
        self._stop: asyncio.Event | None = None
        self._loops: list[asyncio.Task] = []

    async def run_task(self, name: str) -> bool:
        """Run one refresh. Returns True only if the cache was written."""
        task = self.tasks[name]
        if not self.settings.has_token:
            log.debug("No API token, skipping %s refresh", task.name)
            return False
        if name in self._in_flight:
            log.warning("%s refresh still in flight, skipping this run", task.label)
            return False

        self._in_flight.add(name)
        try:
            records = await task.fetch(self.client)
        except UpstreamError as exc:
            log.error("%s fetch error: %s", task.label, exc.message)
            return False
        except Exception:
            log.exception("%s fetch error", task.label)
            return False
        finally:
            self._in_flight.discard(name)

        self.cache.set(task.cache_key, records)
        log.info("Cached %s: %d", task.label.lower(), len(records))
        return True

    async def refresh_leagues(self) -> bool:
        return await self.run_task("leagues")

    async def refresh_teams(self) -> bool:
        return await self.run_task("teams")

    async def refresh_live_scores(self) -> bool:
        return await self.run_task("live_scores")

    async def refresh_fixtures(self) -> bool:
        return await self.run_task("fixtures")

    async def initialize(self) -> None:
        """Populate the cache once, in a fixed order."""
        await self.refresh_leagues()
        await self.refresh_teams()
        await self.refresh_live_scores()
        await self.refresh_fixtures()

    async def _loop(self, task: RefreshTask, stop: asyncio.Event) -> None:
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=task.interval)
            except asyncio.TimeoutError:
                await self.run_task(task.name)

    async def _run(self, stop: asyncio.Event) -> None:
        await self.initialize()
        await asyncio.gather(*(self._loop(t, stop) for t in self.tasks.values()))

    async def start(self) -> None:
        """Start the initial fetch, periodic refresh loops and cache sweep.

        Returns immediately; the initial fetch runs in the background so
        requests are served from whatever is cached meanwhile.
        """
        if not self.settings.has_token:
            log.warning("FOOTBALL_API_TOKEN not set, upstream refresh disabled")
        self._stop = asyncio.Event()
        self._loops = [
            asyncio.create_task(self._run(self._stop), name="refresh"),
            asyncio.create_task(
                run_sweeper(self.cache, self.settings.cache_check_period, self._stop),
                name="cache-sweeper",
            ),
        ]

    async def stop(self) -> None:
        if self._stop is not None:
            self._stop.set()
        for t in self._loops:
            t.cancel()
        await asyncio.gather(*self._loops, return_exceptions=True)
        self._loops = []
        self._stop = None
        if self._owns_client:
            await self.client.close()

    @property
    def running(self) -> bool:
        return bool(self._loops)
