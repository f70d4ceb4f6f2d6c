"""Semantics-preserving rewrites of Imp programs."""

from __future__ import annotations

from typing import assert_never

from impeval.core.ast import (
    AExp,
    And,
    ArithOp,
    Assign,
    BExp,
    BinOp,
    BoolLit,
    Com,
    Compare,
    Id,
    If,
    Not,
    Num,
    Seq,
    Skip,
    While,
)


def optimize_0plus_aexp(expr: AExp) -> AExp:
    """Rewrite every 0 + e to e, bottom up."""
    match expr:
        case Num() | Id():
            return expr
        case BinOp(ArithOp.PLUS, Num(0), right):
            return optimize_0plus_aexp(right)
        case BinOp(op, left, right):
            return BinOp(op, optimize_0plus_aexp(left), optimize_0plus_aexp(right))
        case _:
            assert_never(expr)


def optimize_0plus_bexp(expr: BExp) -> BExp:
    match expr:
        case BoolLit():
            return expr
        case Compare(op, left, right):
            return Compare(op, optimize_0plus_aexp(left), optimize_0plus_aexp(right))
        case Not(operand):
            return Not(optimize_0plus_bexp(operand))
        case And(left, right):
            return And(optimize_0plus_bexp(left), optimize_0plus_bexp(right))
        case _:
            assert_never(expr)


def optimize_0plus(command: Com) -> Com:
    """Apply optimize_0plus_aexp to every expression in a command.

    Command shape is unchanged, so the fuel needed to run it is too.
    """
    match command:
        case Skip():
            return command
        case Assign(name, expr):
            return Assign(name, optimize_0plus_aexp(expr))
        case Seq(first, second):
            return Seq(optimize_0plus(first), optimize_0plus(second))
        case If(cond, then_branch, else_branch):
            return If(optimize_0plus_bexp(cond), optimize_0plus(then_branch), optimize_0plus(else_branch))
        case While(cond, body):
            return While(optimize_0plus_bexp(cond), optimize_0plus(body))
        case _:
            assert_never(command)
