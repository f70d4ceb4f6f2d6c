"""Test configuration and shared fixtures."""

import os

import pytest
from hypothesis import HealthCheck, settings

from impeval.core.state import State

settings.register_profile(
    "impeval",
    max_examples=150,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("impeval")


@pytest.fixture
def empty_state() -> State:
    """State with every variable at zero."""
    return State.empty()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep IMPEVAL_* variables and .env files from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("IMPEVAL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
