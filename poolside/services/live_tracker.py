"""
Live tracker for the Poolside Stat Tracker application.

``LiveTracker`` is the composition root of the in-game workflow. It owns the
single ``TrackerState`` record and wires the event engine, the shot wizard
and the lineup tracker together, handing each only the slice of state and
the callbacks it needs.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..models import (
    ApiResult, ErrorKind, EVENT_BUTTONS, EventButton, EventType, RosterPlayer,
    SITUATION_LABELS, ShotOutcome, ShotRecord, SituationContext, StatEvent,
    Substitution, TAB_STATS, TAB_SUBS, TrackerState, sort_by_cap
)
from ..utils import (
    CLOCK_PRESETS_MIN, LINEUP_SIZE, PERIOD_COUNT, clock_at_elapsed, elapsed_in_period, format_clock,
    period_label
)
from .event_engine import EventRecordingEngine
from .game_store import TrackerSource
from .lineup_tracker import LineupTracker
from .shot_wizard import AssistPicked, Back, Next, OutcomePicked, ShotWizard

logger = logging.getLogger(__name__)


class TrackerInputError(ValueError):
    """Raised for input the tracker UI would never offer (unknown player, bad period)."""
    pass


class TrackerLoadError(RuntimeError):
    """Raised when the initial game data cannot be fetched."""
    pass


class LiveTracker:
    """
    Cross-cutting UI state and routing for one live game.

    Args:
        store: Remote store
        game_id: Game being tracked
        roster: Game roster
        stats: Event log in store order
        substitutions: Substitution log in store order
        lineups: Saved starting lineup (player ids) per period
    """

    def __init__(
        self,
        store: TrackerSource,
        game_id: int,
        roster: Iterable[RosterPlayer],
        stats: Iterable[StatEvent] = (),
        substitutions: Iterable[Substitution] = (),
        lineups: Optional[Dict[int, List[int]]] = None,
    ):
        self.store = store
        self.state = TrackerState(
            game_id=game_id,
            roster=list(roster),
            events=list(stats),
            substitutions=list(substitutions),
            lineups={period: list(ids) for period, ids in (lineups or {}).items()},
        )
        self.state.lineup.in_water = list(self.state.lineups.get(self.state.entry.period, []))
        self.last_shot_result: Optional[ApiResult] = None

        self.wizard = ShotWizard(on_emit=self._on_shot_emitted, on_close=self._on_shot_closed)
        self.engine = EventRecordingEngine(
            store,
            game_id,
            entry=self.state.entry,
            status=self.state.status,
            events=self.state.events,
            find_player=self.state.find_roster_player,
            open_shot_wizard=self._open_shot_wizard,
        )
        self.lineup_tracker = LineupTracker(
            store,
            game_id,
            state=self.state.lineup,
            roster=self.state.roster,
            lineups=self.state.lineups,
            substitutions=self.state.substitutions,
        )

    @classmethod
    def load(cls, store: TrackerSource, game_id: int) -> "LiveTracker":
        """
        Fetch roster, events, substitutions and per-period lineups for a game.

        A period whose lineup cannot be fetched starts with an empty lineup.

        Raises:
            TrackerLoadError: If the roster, events or substitutions cannot be fetched
        """
        roster = store.get_roster(game_id)
        stats = store.list_stats(game_id)
        substitutions = store.list_substitutions(game_id)
        for name, result in (("roster", roster), ("stats", stats), ("substitutions", substitutions)):
            if not result.ok:
                raise TrackerLoadError(f"Could not load {name} for game {game_id}: {result.message}")

        lineups: Dict[int, List[int]] = {}
        for period in range(1, PERIOD_COUNT + 1):
            lineup = store.get_starting_lineup(game_id, period)
            lineups[period] = lineup.value if lineup.ok and lineup.value else []

        return cls(store, game_id, roster.value, stats.value, substitutions.value, lineups)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_player(self, player_id: int) -> None:
        if self.state.find_roster_player(player_id) is None:
            raise TrackerInputError(f"Player {player_id} is not on the roster")
        self.state.entry.selected_player_id = player_id

    def set_clock(self, minutes: Optional[int] = None, seconds: Optional[int] = None) -> None:
        self.state.entry.set_clock(minutes, seconds)

    def apply_clock_preset(self, minutes: int) -> None:
        if minutes not in CLOCK_PRESETS_MIN:
            raise TrackerInputError(f"Unsupported clock preset: {minutes}")
        self.state.entry.set_clock(minutes, 0)

    def set_period(self, period: int) -> None:
        """Switch period: re-seed the in-water set and reset the clock to 8:00."""
        if not 1 <= period <= PERIOD_COUNT:
            raise TrackerInputError(f"Period must be between 1 and {PERIOD_COUNT}")
        self.state.entry.period = period
        self.lineup_tracker.select_period(period)
        self.state.entry.reset_clock()

    def set_situation(self, situation: SituationContext) -> None:
        self.state.entry.situation = situation

    def set_tab(self, tab: str) -> None:
        if tab not in (TAB_STATS, TAB_SUBS):
            raise TrackerInputError(f"Unknown tab: {tab}")
        self.state.active_tab = tab

    @property
    def selected_player(self) -> Optional[RosterPlayer]:
        return self.state.find_roster_player(self.state.entry.selected_player_id)

    def available_event_buttons(self) -> List[EventButton]:
        """Event-type buttons for the selected player's role."""
        player = self.selected_player
        goalkeeper = player.is_goalkeeper if player else False
        return [button for button in EVENT_BUTTONS if button.applies_to(goalkeeper)]

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------
    def press_event(self, event_type: EventType) -> ApiResult:
        """Route an event-type button to update (in edit mode) or record."""
        if self.state.wizard_open:
            return ApiResult.ignored("Finish or cancel the shot first")
        if event_type not in {b.event_type for b in self.available_event_buttons()}:
            return ApiResult.failure(
                ErrorKind.VALIDATION, f"{event_type.value} is not available for the selected player"
            )
        if self.state.status.editing:
            return self.engine.update(event_type)
        return self.engine.record(event_type)

    def edit_event(self, event_id: int) -> None:
        event = next((e for e in self.state.events if e.id == event_id), None)
        if event is None:
            raise TrackerInputError(f"Event {event_id} is not in the log")
        self.engine.edit(event)

    def cancel_edit(self) -> None:
        self.engine.cancel_edit()

    def undo(self) -> ApiResult:
        return self.engine.undo()

    def delete_event(self, event_id: int) -> ApiResult:
        return self.engine.delete_one(event_id)

    # ------------------------------------------------------------------
    # Shot wizard
    # ------------------------------------------------------------------
    def _open_shot_wizard(self, player: RosterPlayer) -> None:
        self.state.shot_player = player
        self.last_shot_result = None
        self.wizard.open(player, self.state.roster)

    def _on_shot_emitted(self, shot: ShotRecord) -> None:
        self.state.shot_player = None
        self.last_shot_result = self.engine.submit_shot(shot)

    def _on_shot_closed(self) -> None:
        self.state.shot_player = None
        self.engine.abandon_shot()

    def shot_tap_pool(self, fx: float, fy: float) -> None:
        self.wizard.tap_pool(fx, fy)

    def shot_tap_goal(self, fx: float, fy: float) -> None:
        self.wizard.tap_goal(fx, fy)

    def shot_next(self) -> None:
        self.wizard.dispatch(Next())

    def shot_back(self) -> None:
        self.wizard.dispatch(Back())

    def shot_outcome(self, outcome: ShotOutcome) -> Optional[ApiResult]:
        """Pick the outcome; returns the store result when the shot was submitted."""
        if self.wizard.dispatch(OutcomePicked(outcome)) is not None:
            return self.last_shot_result
        return None

    def shot_assist(self, assister_id: Optional[int]) -> Optional[ApiResult]:
        """Pick the assister (``None`` for "No Assist") and submit the goal."""
        if self.wizard.dispatch(AssistPicked(assister_id)) is not None:
            return self.last_shot_result
        return None

    def shot_cancel(self) -> None:
        self.wizard.cancel()

    # ------------------------------------------------------------------
    # Substitutions and lineups
    # ------------------------------------------------------------------
    def press_bench_player(self, player_id: int) -> None:
        self.lineup_tracker.toggle_bench_player(player_id)

    def press_in_water_player(self, player_id: int) -> None:
        self.lineup_tracker.select_in_water_player(player_id)

    def confirm_substitution(self) -> ApiResult:
        entry = self.state.entry
        return self.lineup_tracker.confirm_substitution(
            entry.period, elapsed_in_period(entry.minutes, entry.seconds)
        )

    def cancel_substitution(self) -> None:
        self.lineup_tracker.clear_pending()

    def save_lineup(self) -> ApiResult:
        return self.lineup_tracker.save_lineup(self.state.entry.period)

    @property
    def on_bench(self) -> List[RosterPlayer]:
        return self.lineup_tracker.on_bench()

    # ------------------------------------------------------------------
    # Revalidation
    # ------------------------------------------------------------------
    def refresh(self) -> ApiResult:
        """Re-fetch the event and substitution logs from the store."""
        stats = self.store.list_stats(self.state.game_id)
        if not stats.ok:
            return stats
        substitutions = self.store.list_substitutions(self.state.game_id)
        if not substitutions.ok:
            return substitutions
        self.state.events[:] = stats.value
        self.state.substitutions[:] = substitutions.value
        return ApiResult.success()

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------
    def to_view(self) -> Dict[str, Any]:
        """Snapshot of everything the tracker screen renders."""
        state = self.state
        entry = state.entry
        editing = state.status.editing_event
        selected = self.selected_player
        lineup = self.lineup_tracker

        return {
            "gameId": state.game_id,
            "activeTab": state.active_tab,
            "entry": {
                "selectedPlayerId": entry.selected_player_id,
                "selectedCap": selected.cap_number if selected else None,
                "period": entry.period,
                "minutes": entry.minutes,
                "seconds": entry.seconds,
                "situation": entry.situation.value,
            },
            "situations": [
                {"key": s.value, "label": label} for s, label in SITUATION_LABELS.items()
            ],
            "clockPresets": CLOCK_PRESETS_MIN,
            "eventButtons": [
                {"key": b.event_type.value, "label": b.label}
                for b in self.available_event_buttons()
            ],
            "recording": state.status.recording,
            "lastRecorded": None if editing else state.status.last_recorded,
            "editing": {
                "id": editing.id,
                "type": editing.type.value,
                "playerName": editing.player.name if editing.player else "",
            } if editing else None,
            "canUndo": bool(state.events) and editing is None,
            "events": [_event_row(e) for e in reversed(state.events)],
            "roster": [r.to_dict() for r in sort_by_cap(state.roster)],
            "inWater": [r.to_dict() for r in lineup.in_water_players()],
            "onBench": [r.to_dict() for r in lineup.on_bench()],
            "inWaterCount": len(state.lineup.in_water),
            "lineupSize": LINEUP_SIZE,
            "openSlots": lineup.open_slots,
            "canSaveLineup": len(state.lineup.in_water) == LINEUP_SIZE,
            "goalkeeperWarning": lineup.goalkeeper_warning,
            "pendingOut": state.lineup.pending_out,
            "pendingIn": state.lineup.pending_in,
            "substitutions": [_substitution_row(s) for s in reversed(state.substitutions)],
            "shot": {
                "scorer": state.shot_player.to_dict(),
                **self.wizard.state.to_dict(),
                "assistCandidates": [r.to_dict() for r in self.wizard.assist_candidates()],
            } if state.wizard_open else None,
        }


def _event_row(event: StatEvent) -> Dict[str, Any]:
    row = event.to_dict()
    row["clockLabel"] = format_clock(event.clock)
    row["periodLabel"] = period_label(event.period)
    return row


def _substitution_row(substitution: Substitution) -> Dict[str, Any]:
    row = substitution.to_dict()
    row["timeLabel"] = f"{period_label(substitution.period)} {clock_at_elapsed(substitution.time)}"
    return row
