"""Fuel-bounded command evaluator.

Fuel bounds the depth of the evaluator's own call tree, not the number of
commands executed. Every descent into a sub-command costs one unit, and the
decremented budget is shared, not split: both halves of a sequence run with
it, and so do a loop body and the next iteration of the loop. A shallow
loop can therefore iterate many times with modest fuel, while nested
sequences cost fuel in proportion to their depth.

With no fuel left the answer is Indeterminate, whatever the command. It is
always safe to retry with more fuel: a definite answer never changes as the
budget grows.
"""

from __future__ import annotations

from typing import assert_never

from loguru import logger

from impeval.core.ast import Assign, Com, If, Seq, Skip, While
from impeval.core.errors import InvalidFuel
from impeval.core.state import State
from impeval.eval.expr import eval_aexp, eval_bexp
from impeval.eval.result import INDETERMINATE, Definite, EvalResult, Indeterminate


def ceval_step(state: State, command: Com, fuel: int) -> EvalResult:
    """Run command from state with the given recursion budget.

    Args:
        state: Initial state; never mutated.
        command: Command to run.
        fuel: Non-negative recursion budget.

    Returns:
        Definite(final_state), or INDETERMINATE if the budget ran out.

    Raises:
        InvalidFuel: If fuel is negative or not an int.
    """
    if isinstance(fuel, bool) or not isinstance(fuel, int) or fuel < 0:
        raise InvalidFuel(fuel)

    logger.debug("ceval.start command={} fuel={}", type(command).__name__, fuel)
    result = _step(state, command, fuel)
    logger.debug("ceval.done fuel={} result={}", fuel, result)
    return result


def _step(state: State, command: Com, fuel: int) -> EvalResult:
    if fuel == 0:
        return INDETERMINATE
    remaining = fuel - 1

    match command:
        case Skip():
            return Definite(state)

        case Assign(name, expr):
            return Definite(state.update(name, eval_aexp(state, expr)))

        case Seq(first, second):
            match _step(state, first, remaining):
                case Definite(next_state):
                    return _step(next_state, second, remaining)
                case Indeterminate():
                    return INDETERMINATE

        case If(cond, then_branch, else_branch):
            taken = then_branch if eval_bexp(state, cond) else else_branch
            return _step(state, taken, remaining)

        case While():
            return _loop(state, command, fuel)

        case _:
            assert_never(command)


def _loop(state: State, loop: While, fuel: int) -> EvalResult:
    # Re-entering the loop is a tail call at the decremented budget, so it
    # runs as iteration here. Stack depth stays bounded by nesting depth.
    while True:
        if fuel == 0:
            return INDETERMINATE
        remaining = fuel - 1

        if not eval_bexp(state, loop.cond):
            return Definite(state)

        match _step(state, loop.body, remaining):
            case Definite(next_state):
                state, fuel = next_state, remaining
            case Indeterminate():
                return INDETERMINATE
