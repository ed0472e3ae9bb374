"""
Lineup and substitution tracking for the Poolside Stat Tracker application.

Keeps the set of players in the water for the active period. During setup,
bench players fill free slots directly; once seven are in, picking an
in-water player and a bench player forms a pending substitution that is
committed through the remote store.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..models import (
    ApiResult, ErrorKind, LineupState, RosterPlayer, Substitution, sort_by_cap
)
from ..utils import LINEUP_SIZE, LINEUP_SIZE_ERROR
from .game_store import SubstitutionStore

logger = logging.getLogger(__name__)


class LineupTracker:
    """
    Owns who is in the water and turns pending out/in pairs into substitutions.

    Args:
        store: Remote substitution/lineup store
        game_id: Game being tracked
        state: In-water slice of the tracker state
        roster: Game roster
        lineups: Saved starting lineups per period (updated on save)
        substitutions: Substitution log (appended on confirm)
    """

    def __init__(
        self,
        store: SubstitutionStore,
        game_id: int,
        state: LineupState,
        roster: List[RosterPlayer],
        lineups: Dict[int, List[int]],
        substitutions: List[Substitution],
    ):
        self.store = store
        self.game_id = game_id
        self.state = state
        self.roster = roster
        self.lineups = lineups
        self.substitutions = substitutions

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_period(self, period: int) -> None:
        """Re-seed the in-water set from the period's saved lineup, dropping unsaved edits."""
        self.state.in_water = list(self.lineups.get(period, []))
        self.state.clear_pending()

    def toggle_bench_player(self, player_id: int) -> None:
        """Fill a free slot during setup, otherwise mark the player as coming in."""
        if player_id in self.state.in_water or self._roster_player(player_id) is None:
            return
        if len(self.state.in_water) < LINEUP_SIZE and self.state.pending_out is None:
            self.state.in_water.append(player_id)
        else:
            self.state.pending_in = player_id

    def select_in_water_player(self, player_id: int) -> None:
        """Mark an in-water player as going out."""
        if player_id in self.state.in_water:
            self.state.pending_out = player_id

    def clear_pending(self) -> None:
        self.state.clear_pending()

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------
    def confirm_substitution(self, period: int, elapsed_seconds: int) -> ApiResult:
        """Commit the pending out/in pair as a substitution."""
        player_out = self.state.pending_out
        player_in = self.state.pending_in
        if player_out is None or player_in is None:
            return ApiResult.failure(ErrorKind.VALIDATION, "Select a player to go out and one to come in")
        if player_out not in self.state.in_water:
            return ApiResult.failure(ErrorKind.VALIDATION, "Outgoing player is not in the water")
        if player_in in self.state.in_water:
            return ApiResult.failure(ErrorKind.VALIDATION, "Incoming player is already in the water")
        if self.state.submitting:
            logger.debug("Dropping substitution confirm: a submission is already in flight")
            return ApiResult.ignored("A submission is already in flight")

        payload = {
            "period": period,
            "time": int(elapsed_seconds),
            "playerInId": player_in,
            "playerOutId": player_out,
        }
        self.state.submitting = True
        try:
            result = self.store.create_substitution(self.game_id, payload)
            if result.ok:
                self.state.in_water = [p for p in self.state.in_water if p != player_out] + [player_in]
                self.state.clear_pending()
                self.substitutions.append(self._substitution_record(result.value, payload))
                logger.info("Substitution Q%s: %s out, %s in", period, player_out, player_in)
            return result
        finally:
            self.state.submitting = False

    def save_lineup(self, period: int) -> ApiResult:
        """Persist the in-water set as the period's starting lineup."""
        if len(set(self.state.in_water)) != LINEUP_SIZE or len(self.state.in_water) != LINEUP_SIZE:
            return ApiResult.failure(ErrorKind.VALIDATION, LINEUP_SIZE_ERROR)
        if self.state.submitting:
            logger.debug("Dropping lineup save: a submission is already in flight")
            return ApiResult.ignored("A submission is already in flight")

        self.state.submitting = True
        try:
            lineup = list(self.state.in_water)
            result = self.store.save_starting_lineup(self.game_id, period, lineup)
            if result.ok:
                self.lineups[period] = lineup
                logger.info("Saved Q%s starting lineup: %s", period, lineup)
            return result
        finally:
            self.state.submitting = False

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def in_water_players(self) -> List[RosterPlayer]:
        return sort_by_cap([r for r in self.roster if r.player_id in self.state.in_water])

    def on_bench(self) -> List[RosterPlayer]:
        """Roster minus the in-water set, by cap number."""
        return sort_by_cap([r for r in self.roster if r.player_id not in self.state.in_water])

    @property
    def open_slots(self) -> int:
        return max(0, LINEUP_SIZE - len(self.state.in_water))

    @property
    def goalkeeper_warning(self) -> bool:
        """Advisory: players are in the water but none wears a goalkeeper cap."""
        if not self.state.in_water:
            return False
        return not any(r.is_goalkeeper for r in self.in_water_players())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _roster_player(self, player_id: Optional[int]) -> Optional[RosterPlayer]:
        return next((r for r in self.roster if r.player_id == player_id), None)

    def _substitution_record(self, created: object, payload: dict) -> Substitution:
        if isinstance(created, dict) and "id" in created:
            return Substitution.from_dict(created)
        player_in = self._roster_player(payload["playerInId"])
        player_out = self._roster_player(payload["playerOutId"])
        return Substitution(
            id=0,
            period=payload["period"],
            time=payload["time"],
            player_in_id=payload["playerInId"],
            player_out_id=payload["playerOutId"],
            player_in_name=player_in.player.name if player_in else "",
            player_out_name=player_out.player.name if player_out else "",
        )
