"""Evaluators: expressions and fuel-bounded commands."""

from impeval.eval.expr import eval_aexp, eval_bexp
from impeval.eval.fuel import check_monotone, least_fuel, run_with_retry
from impeval.eval.result import INDETERMINATE, Definite, EvalResult, Indeterminate
from impeval.eval.step import ceval_step

__all__ = [
    "eval_aexp",
    "eval_bexp",
    "ceval_step",
    "check_monotone",
    "least_fuel",
    "run_with_retry",
    "Definite",
    "Indeterminate",
    "INDETERMINATE",
    "EvalResult",
]
