"""Runtime configuration for the media helper service."""
from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.imdb.fetcher import DEFAULT_USER_AGENT

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(h|m|s)")
_DURATION_UNITS = {"h": 3600, "m": 60, "s": 1}


def parse_duration(value: str) -> timedelta | None:
    """Parse compact durations such as ``24h``, ``1h30m`` or ``90s``."""

    text = value.strip().lower()
    if not text or _DURATION_PART.sub("", text):
        return None
    seconds = sum(
        float(amount) * _DURATION_UNITS[unit] for amount, unit in _DURATION_PART.findall(text)
    )
    return timedelta(seconds=seconds)


class HelperSettings(BaseSettings):
    """Environment-aware settings for the media helper service."""

    database_url: str = Field(
        default="sqlite:///./media.db",
        description="Connection URL for the popular media SQLite database.",
    )
    database_echo: bool = Field(
        default=False, description="Enable SQL echo for debugging queries."
    )
    host: str = Field(default="0.0.0.0", description="Interface the webserver binds to.")
    port: int = Field(default=8053, description="Port the webserver listens on.")
    authorization_value: SecretStr = Field(
        ..., description='Expected value of the "Authorization" header.'
    )
    scrape_interval: timedelta = Field(
        default=timedelta(hours=24), description="Interval between popular media scrapes."
    )
    request_timeout: float = Field(
        default=20.0, description="Timeout in seconds for requests against IMDb."
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent header sent to IMDb."
    )
    refresh_on_startup: bool = Field(
        default=True,
        description="Whether the background refresh loop starts with the application.",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")

    model_config = SettingsConfigDict(
        env_prefix="MEDIAHELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("authorization_value")
    @classmethod
    def _require_authorization_value(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("authorization value must be provided")
        return value

    @field_validator("scrape_interval", mode="before")
    @classmethod
    def _parse_scrape_interval(cls, value: Any) -> Any:
        if isinstance(value, str):
            parsed = parse_duration(value)
            if parsed is not None:
                return parsed
        return value

    @field_validator("scrape_interval")
    @classmethod
    def _require_positive_interval(cls, value: timedelta) -> timedelta:
        if value.total_seconds() <= 0:
            raise ValueError("scrape interval must be positive")
        return value
