"""Core language: AST, program states and errors."""

from impeval.core.ast import (
    FALSE,
    TRUE,
    AExp,
    And,
    ArithOp,
    Assign,
    BExp,
    BinOp,
    BoolLit,
    CmpOp,
    Com,
    Compare,
    Id,
    If,
    Not,
    Num,
    Seq,
    Skip,
    While,
    eq,
    gt,
    le,
    minus,
    mult,
    neq,
    plus,
    seq,
)
from impeval.core.errors import (
    ImpError,
    InvalidDerivation,
    InvalidFuel,
    MonotonicityViolation,
    UnknownProgram,
)
from impeval.core.state import State

__all__ = [
    # Arithmetic expressions
    "AExp",
    "ArithOp",
    "Num",
    "Id",
    "BinOp",
    # Boolean expressions
    "BExp",
    "CmpOp",
    "BoolLit",
    "Compare",
    "Not",
    "And",
    "TRUE",
    "FALSE",
    # Commands
    "Com",
    "Skip",
    "Assign",
    "Seq",
    "If",
    "While",
    # Helpers
    "plus",
    "minus",
    "mult",
    "eq",
    "neq",
    "le",
    "gt",
    "seq",
    # State
    "State",
    # Errors
    "ImpError",
    "InvalidFuel",
    "InvalidDerivation",
    "MonotonicityViolation",
    "UnknownProgram",
]
