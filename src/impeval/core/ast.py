"""Abstract syntax for Imp: arithmetic, boolean expressions and commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ArithOp(Enum):
    """Binary arithmetic operators."""

    PLUS = "+"
    MINUS = "-"
    MULT = "*"


class CmpOp(Enum):
    """Comparisons between two arithmetic expressions."""

    EQ = "=="
    NEQ = "!="
    LE = "<="
    GT = ">"


# =============================================================================
# Arithmetic expressions
# =============================================================================


@dataclass(frozen=True)
class Num:
    """Integer literal."""

    value: int


@dataclass(frozen=True)
class Id:
    """Variable reference. Unbound variables read as zero."""

    name: str


@dataclass(frozen=True)
class BinOp:
    """Binary arithmetic operator applied to two sub-expressions."""

    op: ArithOp
    left: "AExp"
    right: "AExp"


AExp = Num | Id | BinOp


# =============================================================================
# Boolean expressions
# =============================================================================


@dataclass(frozen=True)
class BoolLit:
    """Boolean literal."""

    value: bool


@dataclass(frozen=True)
class Compare:
    """Comparison of two arithmetic expressions."""

    op: CmpOp
    left: AExp
    right: AExp


@dataclass(frozen=True)
class Not:
    """Boolean negation."""

    operand: "BExp"


@dataclass(frozen=True)
class And:
    """Boolean conjunction."""

    left: "BExp"
    right: "BExp"


BExp = BoolLit | Compare | Not | And


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class Skip:
    """No-op."""


@dataclass(frozen=True)
class Assign:
    """Assignment: name := expr."""

    name: str
    expr: AExp


@dataclass(frozen=True)
class Seq:
    """Sequencing: first; second."""

    first: "Com"
    second: "Com"


@dataclass(frozen=True)
class If:
    """Conditional. Only the branch selected by cond is ever run."""

    cond: BExp
    then_branch: "Com"
    else_branch: "Com"


@dataclass(frozen=True)
class While:
    """Loop: while cond do body end.

    The tree itself is acyclic; repetition happens only when the loop is
    evaluated.
    """

    cond: BExp
    body: "Com"


Com = Skip | Assign | Seq | If | While


# =============================================================================
# Construction helpers
# =============================================================================


def plus(left: AExp, right: AExp) -> BinOp:
    return BinOp(ArithOp.PLUS, left, right)


def minus(left: AExp, right: AExp) -> BinOp:
    return BinOp(ArithOp.MINUS, left, right)


def mult(left: AExp, right: AExp) -> BinOp:
    return BinOp(ArithOp.MULT, left, right)


def eq(left: AExp, right: AExp) -> Compare:
    return Compare(CmpOp.EQ, left, right)


def neq(left: AExp, right: AExp) -> Compare:
    return Compare(CmpOp.NEQ, left, right)


def le(left: AExp, right: AExp) -> Compare:
    return Compare(CmpOp.LE, left, right)


def gt(left: AExp, right: AExp) -> Compare:
    return Compare(CmpOp.GT, left, right)


TRUE = BoolLit(True)
FALSE = BoolLit(False)


def seq(*commands: Com) -> Com:
    """Chain commands with right-nested Seq nodes.

    seq() is Skip, seq(c) is c, seq(a, b, c) is Seq(a, Seq(b, c)).
    """
    if not commands:
        return Skip()
    result = commands[-1]
    for command in reversed(commands[:-1]):
        result = Seq(command, result)
    return result
