"""Expression evaluation.

Both evaluators are total: expressions contain no commands, so structural
recursion always terminates. Integers are Python ints and never overflow.
"""

from __future__ import annotations

from typing import assert_never

from impeval.core.ast import (
    AExp,
    And,
    ArithOp,
    BExp,
    BinOp,
    BoolLit,
    CmpOp,
    Compare,
    Id,
    Not,
    Num,
)
from impeval.core.state import State


def _apply_arith(op: ArithOp, x: int, y: int) -> int:
    match op:
        case ArithOp.PLUS:
            return x + y
        case ArithOp.MINUS:
            return x - y
        case ArithOp.MULT:
            return x * y
        case _:
            assert_never(op)


def _apply_cmp(op: CmpOp, x: int, y: int) -> bool:
    match op:
        case CmpOp.EQ:
            return x == y
        case CmpOp.NEQ:
            return x != y
        case CmpOp.LE:
            return x <= y
        case CmpOp.GT:
            return x > y
        case _:
            assert_never(op)


def eval_aexp(state: State, expr: AExp) -> int:
    """Evaluate an arithmetic expression under state."""
    match expr:
        case Num(value):
            return value
        case Id(name):
            return state.lookup(name)
        case BinOp(op, left, right):
            return _apply_arith(op, eval_aexp(state, left), eval_aexp(state, right))
        case _:
            assert_never(expr)


def eval_bexp(state: State, expr: BExp) -> bool:
    """Evaluate a boolean expression under state."""
    match expr:
        case BoolLit(value):
            return value
        case Compare(op, left, right):
            return _apply_cmp(op, eval_aexp(state, left), eval_aexp(state, right))
        case Not(operand):
            return not eval_bexp(state, operand)
        case And(left, right):
            return eval_bexp(state, left) and eval_bexp(state, right)
        case _:
            assert_never(expr)
