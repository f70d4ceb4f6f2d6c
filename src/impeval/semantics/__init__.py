"""Reference semantics and program transformations."""

from impeval.semantics.bigstep import (
    Derivation,
    EAsgn,
    EIfFalse,
    EIfTrue,
    ESeq,
    ESkip,
    EWhileFalse,
    EWhileTrue,
    check,
    derive,
    deterministic,
    from_run,
    fuel_of,
)
from impeval.semantics.optimize import optimize_0plus, optimize_0plus_aexp, optimize_0plus_bexp

__all__ = [
    "Derivation",
    "ESkip",
    "EAsgn",
    "ESeq",
    "EIfTrue",
    "EIfFalse",
    "EWhileFalse",
    "EWhileTrue",
    "derive",
    "check",
    "fuel_of",
    "from_run",
    "deterministic",
    "optimize_0plus",
    "optimize_0plus_aexp",
    "optimize_0plus_bexp",
]
