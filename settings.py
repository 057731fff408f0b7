"""Runtime configuration for type verification, loaded from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerificationSettings(BaseSettings):
    """
    Knobs for :class:`factory.ClampedFactory`.

    Every field can be overridden with a ``CLAMPED_``-prefixed environment
    variable, e.g. ``CLAMPED_SAMPLE_COUNT=10000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLAMPED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Ranges at most this wide are checked exhaustively
    exhaustive_threshold: int = Field(default=256, ge=1)
    # Inputs drawn per property when sampling
    sample_count: int = Field(default=2000, ge=1)
    seed: int | None = None
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


@lru_cache
def get_settings() -> VerificationSettings:
    return VerificationSettings()
