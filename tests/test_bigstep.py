"""Tests for the big-step semantics and its agreement with ceval_step."""

import pytest
from hypothesis import given
from strategies import commands, fuels, loop_free_commands, states

from impeval.core.ast import FALSE, TRUE, Assign, Id, If, Num, Seq, Skip, While, gt, minus
from impeval.core.errors import InvalidDerivation
from impeval.core.state import State
from impeval.eval.result import Definite
from impeval.eval.step import ceval_step
from impeval.programs import BRANCH_ON_X, FACTORIAL, LOOP_FOREVER, SUM_TO_X
from impeval.semantics.bigstep import (
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

COUNTDOWN = While(gt(Id("X"), Num(0)), Assign("X", minus(Id("X"), Num(1))))


class TestDerive:
    """Building derivations by unbounded evaluation."""

    def test_skip(self, empty_state):
        """Test skip derives ESkip."""
        assert derive(empty_state, Skip()) == ESkip(empty_state, Skip(), empty_state)

    def test_assign(self, empty_state):
        """Test assignment derives EAsgn with the updated state."""
        command = Assign("X", Num(3))
        assert derive(empty_state, command) == EAsgn(empty_state, command, State.of(X=3))

    def test_conditional_rules(self, empty_state):
        """Test the rule follows the condition."""
        assert isinstance(derive(empty_state, If(TRUE, Skip(), Skip())), EIfTrue)
        assert isinstance(derive(empty_state, If(FALSE, Skip(), Skip())), EIfFalse)

    def test_loop_chain(self):
        """Test each iteration adds one EWhileTrue node."""
        derivation = derive(State.of(X=2), COUNTDOWN)
        assert isinstance(derivation, EWhileTrue)
        assert isinstance(derivation.rest, EWhileTrue)
        assert isinstance(derivation.rest.rest, EWhileFalse)
        assert derivation.body.final == State.of(X=1)
        assert derivation.final == State.empty()

    def test_sequence(self):
        """Test sequence premises chain through the intermediate state."""
        derivation = derive(State.of(X=2), BRANCH_ON_X)
        assert isinstance(derivation, ESeq)
        assert derivation.second.initial == derivation.first.final
        assert derivation.final == State.of(X=2, Z=4)

    def test_sum_to_x(self):
        """Test the derivation reaches the same state as the evaluator."""
        derivation = derive(State.of(X=5), SUM_TO_X)
        check(derivation)
        assert derivation.final == State.of(Y=15)

    def test_factorial(self):
        """Test the factorial program."""
        assert derive(State.of(X=5), FACTORIAL).final == State.of(X=5, Y=120)


class TestCheck:
    """Rule validation on derivation trees."""

    def test_valid_derivation_passes(self):
        """Test a derived tree checks."""
        check(derive(State.of(X=3), COUNTDOWN))

    def test_wrong_assignment_result(self, empty_state):
        """Test an assignment concluding the wrong state is rejected."""
        command = Assign("X", Num(3))
        with pytest.raises(InvalidDerivation, match="EAsgn"):
            check(EAsgn(empty_state, command, State.of(X=4)))

    def test_rule_command_mismatch(self, empty_state):
        """Test a rule applied to the wrong command shape is rejected."""
        with pytest.raises(InvalidDerivation, match="not skip"):
            check(ESkip(empty_state, Assign("X", Num(1)), empty_state))

    def test_wrong_branch(self, empty_state):
        """Test EIfTrue on a false condition is rejected."""
        command = If(FALSE, Skip(), Skip())
        branch = ESkip(empty_state, Skip(), empty_state)
        with pytest.raises(InvalidDerivation, match="condition"):
            check(EIfTrue(empty_state, command, empty_state, branch))

    def test_exiting_a_running_loop(self):
        """Test EWhileFalse on a true condition is rejected."""
        state = State.of(X=1)
        with pytest.raises(InvalidDerivation, match="condition is true"):
            check(EWhileFalse(state, COUNTDOWN, state))

    def test_broken_premise_deep_in_tree(self):
        """Test a bad node inside a valid-looking chain is found."""
        good = derive(State.of(X=2), COUNTDOWN)
        bad_body = EAsgn(good.body.initial, good.body.command, State.of(X=7))
        broken = EWhileTrue(good.initial, good.command, good.final, bad_body, good.rest)
        with pytest.raises(InvalidDerivation):
            check(broken)

    def test_disconnected_sequence(self, empty_state):
        """Test a sequence whose premises do not chain is rejected."""
        first = EAsgn(empty_state, Assign("X", Num(1)), State.of(X=1))
        second = ESkip(empty_state, Skip(), empty_state)
        command = Seq(Assign("X", Num(1)), Skip())
        with pytest.raises(InvalidDerivation, match="second premise"):
            check(ESeq(empty_state, command, empty_state, first, second))


class TestFuelOf:
    """The budget read off a derivation is enough to reproduce it."""

    def test_atomic(self, empty_state):
        """Test atomic rules need one level."""
        assert fuel_of(derive(empty_state, Skip())) == 1
        assert fuel_of(derive(empty_state, Assign("X", Num(1)))) == 1

    def test_countdown(self):
        """Test a loop of n iterations needs n + 1."""
        assert fuel_of(derive(State.of(X=4), COUNTDOWN)) == 5

    def test_branch_on_x(self):
        """Test sequence around a conditional."""
        assert fuel_of(derive(State.of(X=2), BRANCH_ON_X)) == 3

    @given(states, loop_free_commands)
    def test_derivation_implies_definite_run(self, state, command):
        """Test oracle => evaluator: the derivation's budget reproduces its state."""
        derivation = derive(state, command)
        check(derivation)
        assert ceval_step(state, command, fuel_of(derivation)) == Definite(derivation.final)


class TestFromRun:
    """Definite runs become derivations."""

    def test_countdown(self):
        """Test a run converts to the derived tree."""
        assert from_run(State.of(X=3), COUNTDOWN, 10) == derive(State.of(X=3), COUNTDOWN)

    def test_indeterminate_run_rejected(self, empty_state):
        """Test there is no derivation for a run that ran out of fuel."""
        with pytest.raises(InvalidDerivation, match="indeterminate"):
            from_run(empty_state, LOOP_FOREVER, 50)

    @given(states, commands, fuels)
    def test_definite_run_implies_derivation(self, state, command, fuel):
        """Test evaluator => oracle: every definite run has a valid derivation."""
        result = ceval_step(state, command, fuel)
        if not isinstance(result, Definite):
            return
        derivation = from_run(state, command, fuel)
        check(derivation)
        assert derivation.final == result.state
        assert fuel_of(derivation) <= fuel
        assert ceval_step(state, command, fuel_of(derivation)) == result


class TestDeterministic:
    """Two derivations of the same run agree."""

    def test_same_run(self):
        """Test a derivation is deterministic with its fuel-built twin."""
        state = State.of(X=5)
        d1 = derive(state, SUM_TO_X)
        d2 = from_run(state, SUM_TO_X, 500)
        assert deterministic(d1, d2)

    def test_different_runs_rejected(self, empty_state):
        """Test derivations of different commands cannot be compared."""
        d1 = derive(empty_state, Skip())
        d2 = derive(empty_state, Assign("X", Num(1)))
        with pytest.raises(InvalidDerivation):
            deterministic(d1, d2)

    @given(states, loop_free_commands)
    def test_deterministic_property(self, state, command):
        """Test derive and from_run always agree."""
        d1 = derive(state, command)
        d2 = from_run(state, command, fuel_of(d1))
        assert deterministic(d1, d2)
