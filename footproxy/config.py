"""Load .env and settings.yaml, expose all configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_PORT = 5000


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


def _port_from_env(default: int) -> int:
    raw = os.getenv("PORT", "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Invalid PORT %r, using %s", raw, default)
        return default


class Settings(BaseModel):
    api_token: str = ""

    @field_validator("api_token")
    @classmethod
    def strip_api_token(cls, v: str) -> str:
        return v.strip()

    base_url: str = "https://api.sportmonks.com/v3/football"
    upstream_timeout: float = 10.0
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cache_ttl: float = 900
    cache_check_period: float = 120
    leagues_refresh_interval: float = 3600
    teams_refresh_interval: float = 3600
    livescores_refresh_interval: float = 15
    fixtures_refresh_interval: float = 900
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "https://khelinfo-frontend.vercel.app",
            "https://atest.khelinfo.in",
        ]
    )

    @property
    def has_token(self) -> bool:
        """Whether refreshes can run at all."""
        return bool(self.api_token)


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    raw["api_token"] = os.getenv("FOOTBALL_API_TOKEN", "")
    raw["port"] = _port_from_env(raw.get("port", DEFAULT_PORT))
    return Settings(**raw)
