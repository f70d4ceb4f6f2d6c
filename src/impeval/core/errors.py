"""Error types for the Imp evaluator.

Running out of fuel is not an error: it is reported as Indeterminate.
These exceptions cover contract violations by callers and failed
correctness checks.
"""

from __future__ import annotations

from typing import Any


class ImpError(Exception):
    """Base class for impeval errors."""


class InvalidFuel(ImpError, ValueError):
    """Fuel must be a non-negative int."""

    def __init__(self, fuel: Any):
        self.fuel = fuel
        super().__init__(f"Fuel must be a non-negative integer, got {fuel!r}")


class InvalidDerivation(ImpError):
    """A big-step derivation does not follow the evaluation rules."""

    def __init__(self, message: str, derivation: Any = None):
        self.derivation = derivation
        super().__init__(message)


class MonotonicityViolation(ImpError):
    """A definite result changed when the fuel budget grew."""

    def __init__(self, smaller: int, larger: int, before: Any, after: Any):
        self.smaller = smaller
        self.larger = larger
        self.before = before
        self.after = after
        super().__init__(f"Result at fuel {smaller} was {before}, but at fuel {larger} it is {after}")


class UnknownProgram(ImpError, KeyError):
    """No sample program registered under this name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown program: {self.name}"
