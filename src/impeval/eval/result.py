"""Results of fuel-bounded evaluation."""

from __future__ import annotations

from dataclasses import dataclass

from impeval.core.state import State


@dataclass(frozen=True)
class Definite:
    """Evaluation finished within the budget with this final state."""

    state: State

    def __str__(self) -> str:
        return f"definite {self.state}"


@dataclass(frozen=True)
class Indeterminate:
    """The budget ran out before the command finished.

    Carries no partial state. Use the INDETERMINATE instance.
    """

    def __str__(self) -> str:
        return "indeterminate"


INDETERMINATE = Indeterminate()

# Sum type for evaluation outcomes
EvalResult = Definite | Indeterminate
