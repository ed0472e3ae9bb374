"""
Event recording engine for the Poolside Stat Tracker application.

Records, edits and deletes stat events for the player selected in the live
tracker. Only one create/update may be outstanding at a time: a trigger that
arrives while ``RecordingStatus.recording`` is set is dropped, not queued.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from ..models import (
    ApiResult, EntryContext, ErrorKind, EventType, RecordingStatus, RosterPlayer,
    ShotOutcome, ShotRecord, SituationContext, StatEvent
)
from ..utils import PERIOD_LENGTH_MIN, split_clock
from .game_store import EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShotContext:
    """Who/when/situation captured as the shot wizard opens."""
    player: RosterPlayer
    period: int
    clock: float
    situation: SituationContext


def _confirmation(label: str, player: RosterPlayer) -> str:
    return f"{label} - {player.label}"


class EventRecordingEngine:
    """
    Mediates between the tracker's selection state and the remote event store.

    Args:
        store: Remote event store
        game_id: Game the events belong to
        entry: Selection slice of the tracker state
        status: Recording/edit slice of the tracker state
        events: The tracker's event log (patched in place)
        find_player: Roster lookup by player id
        open_shot_wizard: Called with the roster player when GOAL/SHOT is pressed
    """

    def __init__(
        self,
        store: EventStore,
        game_id: int,
        entry: EntryContext,
        status: RecordingStatus,
        events: List[StatEvent],
        find_player: Callable[[Optional[int]], Optional[RosterPlayer]],
        open_shot_wizard: Callable[[RosterPlayer], None],
    ):
        self.store = store
        self.game_id = game_id
        self.entry = entry
        self.status = status
        self.events = events
        self._find_player = find_player
        self._open_shot_wizard = open_shot_wizard
        self._shot_context: Optional[ShotContext] = None

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def record(self, event_type: EventType) -> ApiResult:
        """Record ``event_type`` for the selected player, or hand GOAL/SHOT to the wizard."""
        if self.entry.selected_player_id is None:
            return ApiResult.ignored("Select a player first")
        if self.status.recording:
            logger.debug("Dropping %s trigger: a submission is already in flight", event_type.value)
            return ApiResult.ignored("A submission is already in flight")

        player = self._find_player(self.entry.selected_player_id)
        if player is None:
            return ApiResult.failure(ErrorKind.VALIDATION, "Selected player is not on the roster")

        if event_type.is_shot:
            self._shot_context = ShotContext(
                player=player,
                period=self.entry.period,
                clock=self.entry.clock,
                situation=self.entry.situation,
            )
            self.entry.selected_player_id = None
            self._open_shot_wizard(player)
            return ApiResult.ignored("Shot location required")

        self.status.recording = True
        self.status.last_recorded = None
        try:
            payload = self._stat_payload(
                player.player_id, event_type, self.entry.period, self.entry.clock, self.entry.situation
            )
            result = self.store.create_stat(self.game_id, payload)
            if result.ok:
                self.status.last_recorded = _confirmation(event_type.value, player)
                self.entry.selected_player_id = None
                self._append_created(result.value)
                logger.info("Recorded %s for %s", event_type.value, player.label)
            return result
        finally:
            self.status.recording = False

    def submit_shot(self, shot: ShotRecord) -> ApiResult:
        """Store the shot emitted by the wizard using the context captured when it opened."""
        context = self._shot_context
        if context is None:
            return ApiResult.ignored("No shot in progress")
        if self.status.recording:
            logger.debug("Dropping shot submission: a submission is already in flight")
            return ApiResult.ignored("A submission is already in flight")

        self.status.recording = True
        try:
            event_type = EventType.GOAL if shot.outcome is ShotOutcome.GOAL else EventType.SHOT
            payload = self._stat_payload(
                context.player.player_id, event_type, context.period, context.clock, context.situation
            )
            payload.update({
                "x": shot.pool_x,
                "y": shot.pool_y,
                "goalX": shot.goal_x,
                "goalY": shot.goal_y,
                "shotOutcome": shot.outcome.value,
            })
            if shot.assister_id is not None:
                payload["assisterId"] = shot.assister_id

            result = self.store.create_stat(self.game_id, payload)
            if result.ok:
                label = "GOAL" if shot.outcome is ShotOutcome.GOAL else f"SHOT ({shot.outcome.value})"
                self.status.last_recorded = _confirmation(label, context.player)
                self._append_created(result.value)
                logger.info("Recorded %s for %s", label, context.player.label)
            return result
        finally:
            self._shot_context = None
            self.status.recording = False

    def abandon_shot(self) -> None:
        """Forget the captured shot context when the wizard is cancelled."""
        self._shot_context = None

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def edit(self, event: StatEvent) -> None:
        """Load ``event`` into the selection and enter edit mode."""
        self.status.editing_event = event
        self.entry.selected_player_id = event.player_id
        self.entry.period = event.period or 1
        if event.clock is not None:
            minutes, seconds = split_clock(event.clock)
            self.entry.set_clock(minutes, seconds)
        self.entry.situation = event.context

    def update(self, event_type: EventType) -> ApiResult:
        """Replace the edited event's type, player, period, clock and situation."""
        editing = self.status.editing_event
        if editing is None:
            return ApiResult.ignored("No event is being edited")
        if self.entry.selected_player_id is None:
            return ApiResult.ignored("Select a player first")
        if self.status.recording:
            logger.debug("Dropping update trigger: a submission is already in flight")
            return ApiResult.ignored("A submission is already in flight")

        self.status.recording = True
        try:
            payload = self._stat_payload(
                self.entry.selected_player_id, event_type,
                self.entry.period, self.entry.clock, self.entry.situation,
            )
            result = self.store.update_stat(self.game_id, editing.id, payload)
            if result.ok:
                updated = result.value or replace(
                    editing,
                    type=event_type,
                    player_id=self.entry.selected_player_id,
                    period=self.entry.period,
                    clock=self.entry.clock,
                    context=self.entry.situation,
                )
                self._replace_event(updated)
                self.status.editing_event = None
                self.entry.selected_player_id = None
                self.entry.situation = SituationContext.NORMAL
                logger.info("Updated event %s to %s", editing.id, event_type.value)
            return result
        finally:
            self.status.recording = False

    def cancel_edit(self) -> None:
        """Leave edit mode and reset the selection."""
        self.status.editing_event = None
        self.entry.selected_player_id = None
        self.entry.situation = SituationContext.NORMAL
        self.entry.set_clock(PERIOD_LENGTH_MIN, 0)

    # ------------------------------------------------------------------
    # Deleting
    # ------------------------------------------------------------------
    def undo(self) -> ApiResult:
        """Delete the last event in the log; no-op on an empty log."""
        if not self.events:
            return ApiResult.ignored("Nothing to undo")
        result = self.delete_one(self.events[-1].id)
        if result.ok:
            self.status.last_recorded = None
        return result

    def delete_one(self, event_id: int) -> ApiResult:
        """Delete an arbitrary event by id."""
        result = self.store.delete_stat(self.game_id, event_id)
        if result.ok:
            self.events[:] = [e for e in self.events if e.id != event_id]
            editing = self.status.editing_event
            if editing is not None and editing.id == event_id:
                self.cancel_edit()
            logger.info("Deleted event %s", event_id)
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _stat_payload(player_id: int, event_type: EventType, period: int,
                      clock: float, situation: SituationContext) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "playerId": player_id,
            "type": event_type.value,
            "period": period,
            "clock": clock,
        }
        if situation.wire_value:
            payload["context"] = situation.wire_value
        return payload

    def _append_created(self, created: Optional[StatEvent]) -> None:
        if created is not None:
            self.events.append(created)
            return
        # The API did not echo the event back; reload the log to keep undo accurate.
        reloaded = self.store.list_stats(self.game_id)
        if reloaded.ok:
            self.events[:] = reloaded.value

    def _replace_event(self, updated: StatEvent) -> None:
        for index, existing in enumerate(self.events):
            if existing.id == updated.id:
                self.events[index] = updated
                return
