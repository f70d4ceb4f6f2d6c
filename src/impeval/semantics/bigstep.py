"""Big-step relational semantics as explicit derivation trees.

The judgment  st =[ c ]=> st'  holds when a derivation built from the rules
below exists:

    ESkip        st =[ skip ]=> st
    EAsgn        st =[ x := a ]=> st[x |-> aeval st a]
    ESeq         st =[ c1 ]=> st'   st' =[ c2 ]=> st''
                 ---------------------------------------
                 st =[ c1; c2 ]=> st''
    EIfTrue      beval st b = true    st =[ c1 ]=> st'
                 ------------------------------------
                 st =[ if b then c1 else c2 ]=> st'
    EIfFalse     (symmetric, with c2)
    EWhileFalse  beval st b = false
                 ---------------------------
                 st =[ while b do c ]=> st
    EWhileTrue   beval st b = true   st =[ c ]=> st'   st' =[ while b do c ]=> st''
                 ---------------------------------------------------------------
                 st =[ while b do c ]=> st''

The relation is unbounded; derive() diverges on programs that do. The
fuel-bounded evaluator agrees with it:

    st =[ c ]=> st'   iff   ceval_step(st, c, fuel) == Definite(st') for some fuel

fuel_of() witnesses the left-to-right direction and from_run() the
right-to-left one. Neither is used by the evaluator itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from loguru import logger

from impeval.core.ast import Assign, Com, If, Seq, Skip, While
from impeval.core.errors import InvalidDerivation
from impeval.core.state import State
from impeval.eval.expr import eval_aexp, eval_bexp
from impeval.eval.result import Definite, Indeterminate
from impeval.eval.step import ceval_step


@dataclass(frozen=True)
class ESkip:
    initial: State
    command: Skip
    final: State


@dataclass(frozen=True)
class EAsgn:
    initial: State
    command: Assign
    final: State


@dataclass(frozen=True)
class ESeq:
    initial: State
    command: Seq
    final: State
    first: "Derivation"
    second: "Derivation"


@dataclass(frozen=True)
class EIfTrue:
    initial: State
    command: If
    final: State
    branch: "Derivation"


@dataclass(frozen=True)
class EIfFalse:
    initial: State
    command: If
    final: State
    branch: "Derivation"


@dataclass(frozen=True)
class EWhileFalse:
    initial: State
    command: While
    final: State


@dataclass(frozen=True)
class EWhileTrue:
    """One loop iteration: the body, then the rest of the loop."""

    initial: State
    command: While
    final: State
    body: "Derivation"
    rest: "Derivation"


Derivation = ESkip | EAsgn | ESeq | EIfTrue | EIfFalse | EWhileFalse | EWhileTrue


# =============================================================================
# Building derivations
# =============================================================================


def derive(state: State, command: Com) -> Derivation:
    """Build the derivation of state =[ command ]=> final.

    Only terminates when the program does.
    """
    derivation = _derive(state, command)
    logger.debug("bigstep.derived command={} final={}", type(command).__name__, derivation.final)
    return derivation


def _derive(state: State, command: Com) -> Derivation:
    match command:
        case Skip():
            return ESkip(state, command, state)

        case Assign(name, expr):
            return EAsgn(state, command, state.update(name, eval_aexp(state, expr)))

        case Seq(first, second):
            d1 = _derive(state, first)
            d2 = _derive(d1.final, second)
            return ESeq(state, command, d2.final, d1, d2)

        case If(cond, then_branch, else_branch):
            if eval_bexp(state, cond):
                branch = _derive(state, then_branch)
                return EIfTrue(state, command, branch.final, branch)
            branch = _derive(state, else_branch)
            return EIfFalse(state, command, branch.final, branch)

        case While(cond, body):
            iterations: list[Derivation] = []
            current = state
            while eval_bexp(current, cond):
                body_derivation = _derive(current, body)
                iterations.append(body_derivation)
                current = body_derivation.final
            return _close_loop(command, current, iterations)

        case _:
            assert_never(command)


def _close_loop(command: While, exit_state: State, iterations: list[Derivation]) -> Derivation:
    """Fold recorded body derivations into a chain of EWhileTrue nodes."""
    result: Derivation = EWhileFalse(exit_state, command, exit_state)
    for body_derivation in reversed(iterations):
        result = EWhileTrue(body_derivation.initial, command, result.final, body_derivation, result)
    return result


def from_run(state: State, command: Com, fuel: int) -> Derivation:
    """Turn a definite fuel-bounded run into a derivation.

    Raises:
        InvalidDerivation: If the run at this fuel is indeterminate.
    """
    result = ceval_step(state, command, fuel)
    if isinstance(result, Indeterminate):
        raise InvalidDerivation(f"Run of {type(command).__name__} at fuel {fuel} is indeterminate")

    derivation = _from_run(state, command, fuel)
    if derivation is None or derivation.final != result.state:
        raise InvalidDerivation(f"Derivation does not reproduce run at fuel {fuel}", derivation)
    return derivation


def _from_run(state: State, command: Com, fuel: int) -> Derivation | None:
    if fuel == 0:
        return None
    remaining = fuel - 1

    match command:
        case Skip():
            return ESkip(state, command, state)

        case Assign(name, expr):
            return EAsgn(state, command, state.update(name, eval_aexp(state, expr)))

        case Seq(first, second):
            d1 = _from_run(state, first, remaining)
            if d1 is None:
                return None
            d2 = _from_run(d1.final, second, remaining)
            if d2 is None:
                return None
            return ESeq(state, command, d2.final, d1, d2)

        case If(cond, then_branch, else_branch):
            if eval_bexp(state, cond):
                branch = _from_run(state, then_branch, remaining)
                return None if branch is None else EIfTrue(state, command, branch.final, branch)
            branch = _from_run(state, else_branch, remaining)
            return None if branch is None else EIfFalse(state, command, branch.final, branch)

        case While(cond, body):
            iterations: list[Derivation] = []
            current = state
            while True:
                if fuel == 0:
                    return None
                remaining = fuel - 1
                if not eval_bexp(current, cond):
                    return _close_loop(command, current, iterations)
                body_derivation = _from_run(current, body, remaining)
                if body_derivation is None:
                    return None
                iterations.append(body_derivation)
                current, fuel = body_derivation.final, remaining

        case _:
            assert_never(command)


# =============================================================================
# Inspecting derivations
# =============================================================================


def check(derivation: Derivation) -> None:
    """Validate every rule application in a derivation.

    Raises:
        InvalidDerivation: On the first node that breaks its rule.
    """
    pending: list[Derivation] = [derivation]
    while pending:
        node = pending.pop()
        _check_node(node)
        match node:
            case ESeq(first=first, second=second):
                pending.extend((first, second))
            case EIfTrue(branch=branch) | EIfFalse(branch=branch):
                pending.append(branch)
            case EWhileTrue(body=body, rest=rest):
                pending.extend((body, rest))


def _check_node(node: Derivation) -> None:
    def require(condition: bool, message: str) -> None:
        if not condition:
            raise InvalidDerivation(f"{type(node).__name__}: {message}", node)

    match node:
        case ESkip(initial, command, final):
            require(isinstance(command, Skip), "command is not skip")
            require(final == initial, "skip changed the state")

        case EAsgn(initial, command, final):
            require(isinstance(command, Assign), "command is not an assignment")
            expected = initial.update(command.name, eval_aexp(initial, command.expr))
            require(final == expected, f"expected {expected}, got {final}")

        case ESeq(initial, command, final, first, second):
            require(isinstance(command, Seq), "command is not a sequence")
            require(first.command == command.first and first.initial == initial, "first premise mismatch")
            require(
                second.command == command.second and second.initial == first.final,
                "second premise does not start where the first ends",
            )
            require(final == second.final, "conclusion does not match second premise")

        case EIfTrue(initial, command, final, branch) | EIfFalse(initial, command, final, branch):
            require(isinstance(command, If), "command is not a conditional")
            taken = isinstance(node, EIfTrue)
            require(eval_bexp(initial, command.cond) == taken, f"condition does not evaluate to {taken}")
            expected_branch = command.then_branch if taken else command.else_branch
            require(branch.command == expected_branch and branch.initial == initial, "branch premise mismatch")
            require(final == branch.final, "conclusion does not match branch premise")

        case EWhileFalse(initial, command, final):
            require(isinstance(command, While), "command is not a loop")
            require(not eval_bexp(initial, command.cond), "condition is true")
            require(final == initial, "exited loop changed the state")

        case EWhileTrue(initial, command, final, body, rest):
            require(isinstance(command, While), "command is not a loop")
            require(eval_bexp(initial, command.cond), "condition is false")
            require(body.command == command.body and body.initial == initial, "body premise mismatch")
            require(rest.command == command and rest.initial == body.final, "loop premise mismatch")
            require(final == rest.final, "conclusion does not match loop premise")

        case _:
            assert_never(node)


def fuel_of(derivation: Derivation) -> int:
    """A budget at which ceval_step reproduces the derivation's final state.

    Composite rules need one more than the largest budget of their premises;
    monotonicity lets the smaller premise run at the larger budget.
    """
    match derivation:
        case ESkip() | EAsgn() | EWhileFalse():
            return 1
        case ESeq(first=first, second=second):
            return 1 + max(fuel_of(first), fuel_of(second))
        case EIfTrue(branch=branch) | EIfFalse(branch=branch):
            return 1 + fuel_of(branch)
        case EWhileTrue():
            bodies: list[Derivation] = []
            node: Derivation = derivation
            while isinstance(node, EWhileTrue):
                bodies.append(node.body)
                node = node.rest
            fuel = fuel_of(node)
            for body in reversed(bodies):
                fuel = 1 + max(fuel_of(body), fuel)
            return fuel
        case _:
            assert_never(derivation)


def deterministic(d1: Derivation, d2: Derivation) -> bool:
    """Whether two derivations for the same run reach the same final state.

    Both are replayed through ceval_step at a common budget; the evaluator
    is a function, so they must agree.

    Raises:
        InvalidDerivation: If the derivations start from different states
            or commands, or either one is invalid.
    """
    if d1.initial != d2.initial or d1.command != d2.command:
        raise InvalidDerivation("Derivations do not share an initial state and command")
    check(d1)
    check(d2)

    fuel = max(fuel_of(d1), fuel_of(d2))
    result = ceval_step(d1.initial, d1.command, fuel)
    return result == Definite(d1.final) and result == Definite(d2.final)
