"""Evaluator settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EvalSettings(BaseSettings):
    """Defaults for running programs outside the core evaluator."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMPEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    default_fuel: int = Field(default=500, ge=0)
    observed_vars: list[str] = Field(default_factory=lambda: ["X", "Y", "Z"])
    fuel_search_limit: int = Field(default=10_000, ge=1)


def load_settings(**overrides: Any) -> EvalSettings:
    """Load settings from env / .env, with explicit overrides on top."""
    return EvalSettings(**overrides)
