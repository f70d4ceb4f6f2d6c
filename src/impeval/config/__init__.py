"""Configuration package."""

from impeval.config.settings import EvalSettings, load_settings

__all__ = [
    "EvalSettings",
    "load_settings",
]
