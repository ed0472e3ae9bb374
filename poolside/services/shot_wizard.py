"""
Shot capture wizard for the Poolside Stat Tracker application.

Shot and goal events are captured in four steps: where in the pool the shot
was taken, where on the goal face it went, the outcome, and (for goals only)
the assisting teammate. The flow is an explicit state machine:

    POOL --next--> GOAL --next--> OUTCOME --GOAL--> ASSIST
                                          \\--other outcome--> (emit)
    ASSIST --pick or "No Assist"--> (emit)

``transition`` is pure. Emission and cancellation both return the machine to
``INITIAL_STATE``, so one ``ShotWizard`` can be reused for every shot.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from ..models import RosterPlayer, ShotOutcome, ShotRecord, sort_by_cap
from .coordinates import normalize_goal_tap, normalize_pool_tap


class WizardStep(Enum):
    POOL = "pool"
    GOAL = "goal"
    OUTCOME = "outcome"
    ASSIST = "assist"


STEP_ORDER = [WizardStep.POOL, WizardStep.GOAL, WizardStep.OUTCOME, WizardStep.ASSIST]


class InvalidTransition(ValueError):
    """Raised when an event is not accepted in the wizard's current step."""
    pass


@dataclass(frozen=True)
class WizardState:
    """Accumulated shot data and the current step."""
    step: WizardStep = WizardStep.POOL
    pool_x: Optional[float] = None
    pool_y: Optional[float] = None
    goal_x: Optional[float] = None
    goal_y: Optional[float] = None
    outcome: Optional[ShotOutcome] = None

    @property
    def has_pool_location(self) -> bool:
        return self.pool_x is not None and self.pool_y is not None

    @property
    def has_goal_location(self) -> bool:
        return self.goal_x is not None and self.goal_y is not None

    def to_dict(self) -> dict:
        return {
            "step": self.step.value,
            "progress": STEP_ORDER.index(self.step) + 1,
            "poolX": self.pool_x,
            "poolY": self.pool_y,
            "goalX": self.goal_x,
            "goalY": self.goal_y,
            "outcome": self.outcome.value if self.outcome else None,
            "canProceed": (
                self.has_pool_location if self.step is WizardStep.POOL
                else self.has_goal_location if self.step is WizardStep.GOAL
                else False
            ),
        }


INITIAL_STATE = WizardState()


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class PoolPicked:
    x: float
    y: float


@dataclass(frozen=True)
class GoalPicked:
    x: float
    y: float


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class OutcomePicked:
    outcome: ShotOutcome


@dataclass(frozen=True)
class AssistPicked:
    assister_id: Optional[int] = None  # None means "No Assist"


@dataclass(frozen=True)
class Cancel:
    pass


WizardEvent = Union[PoolPicked, GoalPicked, Next, Back, OutcomePicked, AssistPicked, Cancel]


def _emit(state: WizardState, outcome: ShotOutcome,
          assister_id: Optional[int]) -> Tuple[WizardState, ShotRecord]:
    record = ShotRecord(
        pool_x=state.pool_x,
        pool_y=state.pool_y,
        goal_x=state.goal_x,
        goal_y=state.goal_y,
        outcome=outcome,
        assister_id=assister_id,
    )
    return INITIAL_STATE, record


def transition(state: WizardState, event: WizardEvent) -> Tuple[WizardState, Optional[ShotRecord]]:
    """
    Apply one event to the wizard state.

    Returns:
        The next state and, when the wizard terminates, the completed shot.

    Raises:
        InvalidTransition: If the event is not accepted in the current step
    """
    if isinstance(event, Cancel):
        return INITIAL_STATE, None

    step = state.step
    if step is WizardStep.POOL:
        if isinstance(event, PoolPicked):
            return replace(state, pool_x=event.x, pool_y=event.y), None
        if isinstance(event, Next):
            if not state.has_pool_location:
                return state, None
            return replace(state, step=WizardStep.GOAL), None

    elif step is WizardStep.GOAL:
        if isinstance(event, GoalPicked):
            return replace(state, goal_x=event.x, goal_y=event.y), None
        if isinstance(event, Back):
            return replace(state, step=WizardStep.POOL), None
        if isinstance(event, Next):
            if not state.has_goal_location:
                return state, None
            return replace(state, step=WizardStep.OUTCOME), None

    elif step is WizardStep.OUTCOME:
        if isinstance(event, OutcomePicked):
            if event.outcome is ShotOutcome.GOAL:
                return replace(state, step=WizardStep.ASSIST, outcome=event.outcome), None
            return _emit(state, event.outcome, None)
        if isinstance(event, Back):
            return replace(state, step=WizardStep.GOAL), None

    elif step is WizardStep.ASSIST:
        if isinstance(event, AssistPicked):
            return _emit(state, state.outcome, event.assister_id)
        if isinstance(event, Back):
            return replace(state, step=WizardStep.OUTCOME, outcome=None), None

    raise InvalidTransition(f"{type(event).__name__} is not valid in the {step.value} step")


class ShotWizard:
    """
    Reusable driver around ``transition`` for one scorer at a time.

    Args:
        on_emit: Called once with the completed shot
        on_close: Called when the wizard is cancelled
    """

    def __init__(self, on_emit: Callable[[ShotRecord], None],
                 on_close: Optional[Callable[[], None]] = None):
        self.state = INITIAL_STATE
        self.scorer: Optional[RosterPlayer] = None
        self._roster: List[RosterPlayer] = []
        self._on_emit = on_emit
        self._on_close = on_close

    @property
    def is_open(self) -> bool:
        return self.scorer is not None

    def open(self, scorer: RosterPlayer, roster: List[RosterPlayer]) -> None:
        """Start capturing a shot for ``scorer``."""
        self.state = INITIAL_STATE
        self.scorer = scorer
        self._roster = list(roster)

    def assist_candidates(self) -> List[RosterPlayer]:
        """Teammates who may be credited with the assist, by cap number."""
        if self.scorer is None:
            return []
        return sort_by_cap([r for r in self._roster if r.player_id != self.scorer.player_id])

    def dispatch(self, event: WizardEvent) -> Optional[ShotRecord]:
        """Apply an event; emits and closes when the wizard terminates."""
        if not self.is_open:
            raise InvalidTransition("Shot wizard is not open")
        if isinstance(event, AssistPicked) and event.assister_id is not None:
            if event.assister_id not in {r.player_id for r in self.assist_candidates()}:
                raise InvalidTransition("Assister must be a teammate other than the scorer")

        self.state, record = transition(self.state, event)
        if record is not None:
            self.scorer = None
            self._on_emit(record)
        elif isinstance(event, Cancel):
            self.scorer = None
            if self._on_close is not None:
                self._on_close()
        return record

    # Convenience entry points for diagram taps (fractions of the diagram box)
    def tap_pool(self, fx: float, fy: float) -> None:
        x, y = normalize_pool_tap(fx, fy)
        self.dispatch(PoolPicked(x, y))

    def tap_goal(self, fx: float, fy: float) -> None:
        x, y = normalize_goal_tap(fx, fy)
        self.dispatch(GoalPicked(x, y))

    def cancel(self) -> None:
        self.dispatch(Cancel())
