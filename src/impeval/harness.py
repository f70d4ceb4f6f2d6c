"""Run a program with a fixed budget and read back a few variables."""

from __future__ import annotations

from collections.abc import Sequence

from impeval.config.settings import load_settings
from impeval.core.ast import Com
from impeval.core.state import State
from impeval.eval.result import Definite, Indeterminate
from impeval.eval.step import ceval_step


def observe(
    state: State,
    command: Com,
    names: Sequence[str] | None = None,
    fuel: int | None = None,
) -> tuple[int, ...] | Indeterminate:
    """Final values of names after running command, or INDETERMINATE.

    names defaults to the configured observed variables (X, Y, Z) and fuel
    to the configured default budget (500).
    """
    if names is None or fuel is None:
        settings = load_settings()
        names = settings.observed_vars if names is None else names
        fuel = settings.default_fuel if fuel is None else fuel

    match ceval_step(state, command, fuel):
        case Definite(final):
            return tuple(final.lookup(name) for name in names)
        case Indeterminate() as result:
            return result
