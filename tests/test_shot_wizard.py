"""
Unit tests for the shot capture wizard.

Covers the pure transition function (step order, emission, cancellation)
and the ShotWizard driver (assist candidates, callbacks).
"""
import unittest

from poolside.models import ShotOutcome, ShotRecord
from poolside.services.shot_wizard import (
    INITIAL_STATE, AssistPicked, Back, Cancel, GoalPicked, InvalidTransition, Next,
    OutcomePicked, PoolPicked, ShotWizard, WizardStep, transition
)

from fakes import make_roster


def _run(events, state=INITIAL_STATE):
    """Feed events through ``transition`` and collect any emitted records."""
    emitted = []
    for event in events:
        state, record = transition(state, event)
        if record is not None:
            emitted.append(record)
    return state, emitted


class TestTransition(unittest.TestCase):
    """Test cases for the pure wizard transition function."""

    def test_goal_with_assist_emits_full_record(self) -> None:
        """Test a goal with an assist emits every field."""
        state, emitted = _run([
            PoolPicked(1.5, 2.0), Next(),
            GoalPicked(1.2, 0.4), Next(),
            OutcomePicked(ShotOutcome.GOAL),
            AssistPicked(7),
        ])
        self.assertEqual(emitted, [ShotRecord(
            pool_x=1.5, pool_y=2.0, goal_x=1.2, goal_y=0.4,
            outcome=ShotOutcome.GOAL, assister_id=7,
        )])
        self.assertEqual(state, INITIAL_STATE)

    def test_non_goal_outcome_emits_without_assist_step(self) -> None:
        """Test non-goal outcomes finish without the assist step."""
        state, emitted = _run([
            PoolPicked(10.0, 5.0), Next(),
            GoalPicked(2.0, 0.5), Next(),
        ])
        self.assertIs(state.step, WizardStep.OUTCOME)

        state, record = transition(state, OutcomePicked(ShotOutcome.MISSED))
        self.assertEqual(record.outcome, ShotOutcome.MISSED)
        self.assertIsNone(record.assister_id)
        self.assertEqual(state, INITIAL_STATE)

    def test_no_assist_emits_none(self) -> None:
        """Test choosing no assist emits a null assister."""
        _, emitted = _run([
            PoolPicked(3.0, 3.0), Next(), GoalPicked(0.5, 0.5), Next(),
            OutcomePicked(ShotOutcome.GOAL), AssistPicked(None),
        ])
        self.assertEqual(len(emitted), 1)
        self.assertIsNone(emitted[0].assister_id)

    def test_next_requires_a_location(self) -> None:
        """Test Next is refused until a location is tapped."""
        state, record = transition(INITIAL_STATE, Next())
        self.assertIs(state.step, WizardStep.POOL)
        self.assertIsNone(record)

        state, _ = _run([PoolPicked(1.0, 1.0), Next(), Next()])
        self.assertIs(state.step, WizardStep.GOAL)

    def test_back_keeps_coordinates_and_clears_outcome_from_assist(self) -> None:
        """Test Back keeps taps and clears the outcome from the assist step."""
        state, _ = _run([
            PoolPicked(4.0, 6.0), Next(), GoalPicked(1.0, 0.2), Next(),
            OutcomePicked(ShotOutcome.GOAL),
        ])
        self.assertIs(state.step, WizardStep.ASSIST)

        state, _ = transition(state, Back())
        self.assertIs(state.step, WizardStep.OUTCOME)
        self.assertIsNone(state.outcome)

        state, _ = _run([Back(), Back()], state)
        self.assertIs(state.step, WizardStep.POOL)
        self.assertEqual((state.pool_x, state.pool_y), (4.0, 6.0))
        self.assertEqual((state.goal_x, state.goal_y), (1.0, 0.2))

    def test_cancel_from_every_step_resets_without_emitting(self) -> None:
        """Test Cancel resets from any step and emits nothing."""
        prefixes = [
            [],
            [PoolPicked(1.0, 1.0), Next()],
            [PoolPicked(1.0, 1.0), Next(), GoalPicked(1.0, 0.1), Next()],
            [PoolPicked(1.0, 1.0), Next(), GoalPicked(1.0, 0.1), Next(), OutcomePicked(ShotOutcome.GOAL)],
        ]
        for prefix in prefixes:
            state, emitted = _run(prefix + [Cancel()])
            self.assertEqual(emitted, [])
            self.assertEqual(state, INITIAL_STATE)
            self.assertIsNone(state.pool_x)
            self.assertIsNone(state.goal_x)
            self.assertIsNone(state.outcome)

    def test_event_not_valid_for_step_is_rejected(self) -> None:
        """Test events invalid for the current step raise."""
        with self.assertRaises(InvalidTransition):
            transition(INITIAL_STATE, OutcomePicked(ShotOutcome.SAVED))
        with self.assertRaises(InvalidTransition):
            transition(INITIAL_STATE, Back())

    def test_state_to_dict_reports_progress(self) -> None:
        """Test the serialized state reports the step and progress."""
        state, _ = _run([PoolPicked(1.0, 2.0)])
        view = state.to_dict()
        self.assertEqual(view["step"], "pool")
        self.assertEqual(view["progress"], 1)
        self.assertTrue(view["canProceed"])
        self.assertFalse(INITIAL_STATE.to_dict()["canProceed"])


class TestShotWizard(unittest.TestCase):
    """Test cases for the ShotWizard wrapper."""

    def setUp(self) -> None:
        """Set up a wizard over a small roster."""
        self.roster = make_roster(5)
        self.emitted = []
        self.closed = []
        self.wizard = ShotWizard(on_emit=self.emitted.append, on_close=lambda: self.closed.append(True))

    def test_assist_candidates_exclude_scorer(self) -> None:
        """Test the scorer is not offered as an assister."""
        self.wizard.open(self.roster[2], self.roster)
        candidates = [r.player_id for r in self.wizard.assist_candidates()]
        self.assertEqual(candidates, [1, 2, 4, 5])

    def test_tap_flow_emits_once_and_closes(self) -> None:
        """Test a full tap flow emits one record and closes."""
        self.wizard.open(self.roster[1], self.roster)
        self.wizard.tap_pool(0.5, 0.5)
        self.wizard.dispatch(Next())
        self.wizard.tap_goal(0.5, 0.0)
        self.wizard.dispatch(Next())
        self.wizard.dispatch(OutcomePicked(ShotOutcome.GOAL))
        self.wizard.dispatch(AssistPicked(4))

        self.assertEqual(len(self.emitted), 1)
        record = self.emitted[0]
        self.assertEqual((record.pool_x, record.pool_y), (12.5, 10.0))
        self.assertAlmostEqual(record.goal_y, 0.9)
        self.assertEqual(record.assister_id, 4)
        self.assertFalse(self.wizard.is_open)
        self.assertEqual(self.closed, [])

    def test_scorer_cannot_assist_own_goal(self) -> None:
        """Test the scorer is rejected as their own assister."""
        self.wizard.open(self.roster[1], self.roster)
        self.wizard.dispatch(PoolPicked(1.0, 1.0))
        self.wizard.dispatch(Next())
        self.wizard.dispatch(GoalPicked(1.0, 0.5))
        self.wizard.dispatch(Next())
        self.wizard.dispatch(OutcomePicked(ShotOutcome.GOAL))
        with self.assertRaises(InvalidTransition):
            self.wizard.dispatch(AssistPicked(2))
        self.assertEqual(self.emitted, [])

    def test_cancel_closes_without_emitting(self) -> None:
        """Test cancelling closes the wizard without a record."""
        self.wizard.open(self.roster[0], self.roster)
        self.wizard.dispatch(PoolPicked(1.0, 1.0))
        self.wizard.cancel()
        self.assertEqual(self.emitted, [])
        self.assertEqual(self.closed, [True])
        self.assertEqual(self.wizard.state, INITIAL_STATE)

    def test_dispatch_when_closed_is_rejected(self) -> None:
        """Test input to a closed wizard raises."""
        with self.assertRaises(InvalidTransition):
            self.wizard.dispatch(Next())


if __name__ == "__main__":
    unittest.main()
