"""
Roster service for the Poolside Stat Tracker application.

This module provides the pre-game roster workflow: adding players with cap
numbers, removing them, and saving or loading named roster presets.
"""
import logging
from typing import List, Optional, Tuple

from ..models import ApiResult, RosterPlayer, sort_by_cap
from ..utils.constants import MAX_CAP_NUMBER, MIN_CAP_NUMBER, ROSTER_CAP_CHOICES
from .game_store import GameStore

logger = logging.getLogger(__name__)


class RosterValidationError(Exception):
    """Custom exception for roster validation errors."""
    pass


class RosterService:
    """
    Service class for managing a game's roster and roster presets.

    Validation happens here, before any remote call; persistence is delegated
    to the store.
    """

    def __init__(self, store: GameStore):
        """
        Initialize RosterService.

        Args:
            store: Remote store for the current session
        """
        self.store = store

    @staticmethod
    def validate_roster_entry(player_id: Optional[int], cap_number: Optional[int],
                              roster: Optional[List[RosterPlayer]] = None) -> List[str]:
        """
        Validate a roster entry and return list of validation errors.

        Args:
            player_id: Player being added
            cap_number: Cap number for this game
            roster: Current roster, used to reject duplicates

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if not player_id or not cap_number:
            errors.append("Player and cap number are required")
            return errors

        if not MIN_CAP_NUMBER <= cap_number <= MAX_CAP_NUMBER:
            errors.append(f"Cap number must be between {MIN_CAP_NUMBER} and {MAX_CAP_NUMBER}")

        for entry in roster or []:
            if entry.player_id == player_id:
                errors.append("Player is already on the roster")
            if entry.cap_number == cap_number:
                errors.append(f"Cap number {cap_number} is already taken")
        return errors

    def add_player(self, game_id: int, player_id: Optional[int], cap_number: Optional[int],
                   roster: Optional[List[RosterPlayer]] = None) -> ApiResult:
        """
        Add a player to the game roster with validation.

        Raises:
            RosterValidationError: If the entry is invalid
        """
        errors = self.validate_roster_entry(player_id, cap_number, roster)
        if errors:
            raise RosterValidationError("; ".join(errors))
        return self.store.add_to_roster(game_id, player_id, cap_number)

    def get_roster(self, game_id: int) -> ApiResult:
        return self.store.get_roster(game_id)

    def remove_player(self, game_id: int, roster_id: int) -> ApiResult:
        return self.store.remove_from_roster(game_id, roster_id)

    @staticmethod
    def available_cap_numbers(roster: List[RosterPlayer]) -> List[int]:
        """Cap numbers offered for new roster entries that are not yet in use."""
        used = {entry.cap_number for entry in roster}
        return [n for n in ROSTER_CAP_CHOICES if n not in used]

    @staticmethod
    def split_goalkeepers(roster: List[RosterPlayer]) -> Tuple[List[RosterPlayer], List[RosterPlayer]]:
        """Return (goalkeepers, field players), each ordered by cap number."""
        ordered = sort_by_cap(roster)
        return ([r for r in ordered if r.is_goalkeeper], [r for r in ordered if not r.is_goalkeeper])

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    def list_presets(self) -> ApiResult:
        return self.store.list_presets()

    def save_preset(self, name: str, roster: List[RosterPlayer]) -> ApiResult:
        """
        Save the current roster as a named preset.

        Raises:
            RosterValidationError: If the name is blank or the roster is empty
        """
        if not name or not name.strip():
            raise RosterValidationError("Preset name is required")
        if not roster:
            raise RosterValidationError("Cannot save an empty roster as a preset")
        entries = [{"playerId": r.player_id, "capNumber": r.cap_number} for r in roster]
        return self.store.save_preset(name.strip(), entries)

    def delete_preset(self, preset_id: int) -> ApiResult:
        return self.store.delete_preset(preset_id)

    def load_preset(self, game_id: int, preset_id: int, current_roster: List[RosterPlayer]) -> ApiResult:
        """
        Add a preset's players to the game roster.

        Nothing is removed. Preset entries whose player is already on the
        roster, or whose cap number is already worn, are skipped. Adds run one
        call at a time and the first failure stops the load; entries added
        before it stay on the roster.

        Returns:
            On success, the list of preset entries that were added
        """
        preset = self.store.get_preset(preset_id)
        if not preset.ok:
            return preset

        players_on_roster = {entry.player_id for entry in current_roster}
        caps_in_use = {entry.cap_number for entry in current_roster}
        added: List[RosterPlayer] = []
        for entry in preset.value.players:
            if entry.player_id in players_on_roster or entry.cap_number in caps_in_use:
                logger.debug("Skipping preset entry %s: player or cap already on the roster", entry.label)
                continue
            result = self.store.add_to_roster(game_id, entry.player_id, entry.cap_number)
            if not result.ok:
                return result
            players_on_roster.add(entry.player_id)
            caps_in_use.add(entry.cap_number)
            added.append(entry)

        logger.info("Loaded preset %s into game %s (%d of %d players added)",
                    preset.value.name, game_id, len(added), len(preset.value.players))
        return ApiResult.success(added)
