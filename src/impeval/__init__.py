"""Reference evaluator for Imp with a fuel-bounded command interpreter."""

from loguru import logger

from impeval.core import (
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
    ImpError,
    Not,
    Num,
    Seq,
    Skip,
    State,
    While,
    seq,
)
from impeval.eval import (
    INDETERMINATE,
    Definite,
    EvalResult,
    Indeterminate,
    ceval_step,
    eval_aexp,
    eval_bexp,
)

__all__ = [
    "AExp",
    "BExp",
    "Com",
    "ArithOp",
    "CmpOp",
    "Num",
    "Id",
    "BinOp",
    "BoolLit",
    "Compare",
    "Not",
    "And",
    "Skip",
    "Assign",
    "Seq",
    "If",
    "While",
    "seq",
    "State",
    "ImpError",
    "eval_aexp",
    "eval_bexp",
    "ceval_step",
    "Definite",
    "Indeterminate",
    "INDETERMINATE",
    "EvalResult",
]

logger.disable("impeval")
