"""Lightweight configuration for the trioduel server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from trioduel.repository.json_store import DEFAULT_CATALOG_PATH


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    catalog_path: Path = Field(
        default=DEFAULT_CATALOG_PATH, description="JSON file holding the character catalog"
    )
    recent_log_limit: int = Field(
        default=15, description="Number of battle log entries returned to clients", gt=0
    )
    rng_seed: str | None = Field(
        default=None,
        description="Base seed for deterministic matches; unset means unseeded play",
    )
    log_level: str = Field(default="INFO", description="Level for the trioduel logger")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
