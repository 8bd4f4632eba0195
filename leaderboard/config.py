"""Configuration helpers for scoring defaults and service settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STROKE_INDICES: List[int] = [
    3, 7, 13, 15, 11, 5, 17, 1, 9, 6, 2, 14, 18, 8, 10, 16, 4, 12,
]


class Settings(BaseSettings):
    stroke_indices: List[int] = Field(
        default_factory=lambda: list(DEFAULT_STROKE_INDICES)
    )
    default_par: int = Field(default=4, ge=1)
    historical_rounds_window: int = Field(default=3, ge=1)

    blow_up_strokes: int = 6
    grind_streak_threshold: int = 3
    upset_handicap_margin: float = 3.0

    require_api_key: bool = False
    api_keys: List[str] = Field(default_factory=list)
    cors_allow_origins: str = "http://localhost,http://127.0.0.1"

    model_config = SettingsConfigDict(
        env_prefix="LEADERBOARD_", env_file=".env", extra="ignore"
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = [
    "DEFAULT_STROKE_INDICES",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
