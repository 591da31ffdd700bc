"""FastAPI application serving cached football data."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from footproxy.config import Settings, load_settings
from footproxy.services.query import QueryService
from footproxy.services.refresh import RefreshScheduler


def _query(request: Request) -> QueryService:
    return request.app.state.query


def _omit_nulls(record: BaseModel) -> dict[str, Any]:
    """Dump a shaped record, leaving out top-level and score fields that are None.

    participants is passed through as stored, nulls included.
    """
    body = {k: v for k, v in record.model_dump().items() if v is not None}
    body["scores"] = [
        {k: v for k, v in score.items() if v is not None} for score in body["scores"]
    ]
    return body


def create_app(
    settings: Settings | None = None,
    *,
    scheduler: RefreshScheduler | None = None,
    start_refresh: bool = True,
) -> FastAPI:
    """Build the app. start_refresh=False serves the cache without polling upstream."""
    settings = settings if settings is not None else load_settings()
    if scheduler is None:
        scheduler = RefreshScheduler(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if start_refresh:
            await scheduler.start()
        try:
            yield
        finally:
            if start_refresh:
                await scheduler.stop()

    app = FastAPI(title="Football Cache Proxy", lifespan=lifespan)
    app.state.settings = settings
    app.state.scheduler = scheduler
    app.state.query = QueryService(scheduler.cache)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
    )

    @app.get("/api/football/livescores")
    def livescores(request: Request):
        return {"data": [_omit_nulls(m) for m in _query(request).get_live_scores()]}

    @app.get("/api/football/fixtures")
    def fixtures(request: Request):
        return {"data": [_omit_nulls(f) for f in _query(request).get_fixtures()]}

    @app.get("/api/football/teams")
    def teams(request: Request):
        return {"data": _query(request).get_teams()}

    @app.get("/api/football/leagues")
    def leagues(request: Request):
        return {"data": _query(request).get_leagues()}

    @app.get("/api/ping", response_class=PlainTextResponse)
    def ping():
        return "pong"

    return app
