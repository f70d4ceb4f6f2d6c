"""Working with fuel budgets.

A definite answer at some budget is reproduced, unchanged, at every larger
budget. The helpers here check that property on concrete runs and rely on
it to search for budgets.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from impeval.core.ast import Com
from impeval.core.errors import InvalidFuel, MonotonicityViolation
from impeval.core.state import State
from impeval.eval.result import Definite, EvalResult, Indeterminate
from impeval.eval.step import ceval_step


def check_monotone(state: State, command: Com, fuels: Iterable[int]) -> None:
    """Evaluate at each budget and check answers never change once definite.

    Raises:
        MonotonicityViolation: If a larger budget loses or changes a
            definite answer.
    """
    settled: tuple[int, EvalResult] | None = None
    for fuel in sorted(set(fuels)):
        result = ceval_step(state, command, fuel)
        if settled is not None and result != settled[1]:
            raise MonotonicityViolation(settled[0], fuel, settled[1], result)
        if settled is None and isinstance(result, Definite):
            settled = (fuel, result)


def least_fuel(state: State, command: Com, limit: int) -> int | None:
    """Smallest budget for which the run is definite, or None past limit.

    Binary search over [1, limit]; monotonicity makes "definite at fuel"
    a threshold predicate.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise InvalidFuel(limit)
    if isinstance(ceval_step(state, command, limit), Indeterminate):
        logger.debug("fuel.search.exhausted limit={}", limit)
        return None

    low, high = 1, limit
    while low < high:
        mid = (low + high) // 2
        if isinstance(ceval_step(state, command, mid), Definite):
            high = mid
        else:
            low = mid + 1
    logger.debug("fuel.search.found fuel={} limit={}", low, limit)
    return low


def run_with_retry(state: State, command: Com, start: int, limit: int) -> EvalResult:
    """Retry with doubled fuel until the run is definite or exceeds limit.

    The final attempt uses exactly limit. Returns the last result.
    """
    if isinstance(start, bool) or not isinstance(start, int) or start < 1:
        raise InvalidFuel(start)
    fuel = min(start, limit)
    while True:
        result = ceval_step(state, command, fuel)
        if isinstance(result, Definite) or fuel >= limit:
            return result
        logger.debug("fuel.retry fuel={} next={}", fuel, min(fuel * 2, limit))
        fuel = min(fuel * 2, limit)
