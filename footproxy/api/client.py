"""Async httpx wrapper for the football data provider."""

from __future__ import annotations

from typing import Any

import httpx

BASE_URL = "https://api.sportmonks.com/v3/football"
DEFAULT_TIMEOUT = 10.0


class UpstreamError(Exception):
    """A failed upstream fetch, carrying the best available message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class FootballAPIClient:
    """Async HTTP client for the football data API."""

    def __init__(
        self,
        api_token: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = api_token
        kwargs: dict[str, Any] = {"base_url": base_url, "timeout": timeout}
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_resource(
        self, path: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Make an authenticated GET request and return the decoded JSON body.

        Raises UpstreamError for transport failures, non-2xx statuses and
        bodies that are not JSON.
        """
        params = dict(params or {})
        params["api_token"] = self._api_token
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(str(exc) or "network failure") from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                _error_message(response, str(exc)),
                status_code=response.status_code,
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"invalid JSON body from {path}") from exc
