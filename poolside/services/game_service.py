"""
Game scheduling, lifecycle and post-game summary service.

Games move UPCOMING -> LIVE -> ENDED. The summary lists recorded events and
substitutions in store order; totals are whatever the API supplies.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..models import (
    ApiResult, ErrorKind, EventSummaryRow, GameStatus, GameSummary, SubstitutionSummaryRow
)
from ..utils import clock_at_elapsed, format_clock, period_label
from .game_store import GameStore

logger = logging.getLogger(__name__)


class GameValidationError(Exception):
    """Raised when a new game is missing required details."""
    pass


class GameService:
    """Service for game scheduling, status transitions and summaries."""

    def __init__(self, store: GameStore):
        self.store = store

    def list_games(self) -> ApiResult:
        return self.store.list_games()

    def get_game(self, game_id: int) -> ApiResult:
        return self.store.get_game(game_id)

    @staticmethod
    def validate_game_entry(opponent: Optional[str], date: Optional[str]) -> List[str]:
        """Return validation errors for a new game (empty if valid)."""
        errors = []
        if not (opponent or "").strip() or not (date or "").strip():
            errors.append("Opponent and date are required")
        return errors

    def create_game(self, opponent: Optional[str], date: Optional[str],
                    location: Optional[str] = None, home_or_away: Optional[str] = None) -> ApiResult:
        """
        Schedule a new game.

        Raises:
            GameValidationError: If the opponent or date is missing
        """
        errors = self.validate_game_entry(opponent, date)
        if errors:
            raise GameValidationError("; ".join(errors))

        payload: Dict[str, Any] = {"opponent": opponent.strip(), "date": date.strip()}
        if location:
            payload["location"] = location
        if home_or_away:
            payload["homeOrAway"] = home_or_away
        result = self.store.create_game(payload)
        if result.ok:
            logger.info("Scheduled game against %s on %s", payload["opponent"], payload["date"])
        return result

    def delete_game(self, game_id: int) -> ApiResult:
        return self.store.delete_game(game_id)

    def start_game(self, game_id: int) -> ApiResult:
        """Move an upcoming game to live."""
        return self._transition(game_id, GameStatus.UPCOMING, self.store.start_game)

    def end_game(self, game_id: int) -> ApiResult:
        """Move a live game to ended."""
        return self._transition(game_id, GameStatus.LIVE, self.store.end_game)

    def _transition(self, game_id: int, required: GameStatus, action) -> ApiResult:
        game = self.store.get_game(game_id)
        if not game.ok:
            return game
        if game.value.status is not required:
            return ApiResult.failure(
                ErrorKind.VALIDATION,
                f"Game is {game.value.status.value}, expected {required.value}",
            )
        result = action(game_id)
        if result.ok:
            logger.info("Game %s left %s", game_id, required.value)
        return result

    def playing_times(self, game_id: int, player_ids: Iterable[int]) -> Dict[int, int]:
        """Playing time per player as supplied by the API; unavailable values count as 0."""
        times: Dict[int, int] = {}
        for player_id in player_ids:
            result = self.store.get_playing_time(game_id, player_id)
            times[player_id] = result.value if result.ok else 0
        return times

    def build_summary(self, game_id: int) -> ApiResult:
        """Collect the game, its event log, substitutions and playing times."""
        game = self.store.get_game(game_id)
        if not game.ok:
            return game
        roster = self.store.get_roster(game_id)
        if not roster.ok:
            return roster
        stats = self.store.list_stats(game_id)
        if not stats.ok:
            return stats
        substitutions = self.store.list_substitutions(game_id)
        if not substitutions.ok:
            return substitutions

        caps = {r.player_id: r.cap_number for r in roster.value}
        names = {r.player_id: r.player.name for r in roster.value}
        summary = GameSummary(game=game.value)
        for event in stats.value:
            summary.events.append(EventSummaryRow(
                event_id=event.id,
                event_type=event.type.value,
                player_id=event.player_id,
                player_name=event.player.name if event.player else names.get(event.player_id, ""),
                cap_number=caps.get(event.player_id),
                period_label=period_label(event.period),
                clock_label=format_clock(event.clock),
                context=event.context.wire_value,
                shot_outcome=event.shot_outcome.value if event.shot_outcome else None,
            ))
        for substitution in substitutions.value:
            summary.substitutions.append(SubstitutionSummaryRow(
                period=substitution.period,
                time_label=clock_at_elapsed(substitution.time),
                player_in_name=substitution.player_in_name,
                player_out_name=substitution.player_out_name,
            ))
        summary.playing_time_seconds = self.playing_times(game_id, caps.keys())
        return ApiResult.success(summary)
