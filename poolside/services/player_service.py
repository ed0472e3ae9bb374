"""
Player service for the Poolside Stat Tracker application.

Players are registered once and then assigned to games through the roster
workflow. This service validates new players and lists the ones that can
still be added to a given game.
"""
import logging
from typing import List, Optional

from ..models import ApiResult, Player, RosterPlayer
from .game_store import GameStore

logger = logging.getLogger(__name__)


class PlayerValidationError(Exception):
    """Custom exception for player validation errors."""
    pass


class PlayerService:
    """Service class for registering and removing players."""

    def __init__(self, store: GameStore):
        """
        Initialize PlayerService.

        Args:
            store: Remote store for the current session
        """
        self.store = store

    @staticmethod
    def validate_player(first_name: Optional[str], last_name: Optional[str]) -> List[str]:
        """
        Validate a new player and return list of validation errors.

        Args:
            first_name: Player's first name
            last_name: Player's last name

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if not (first_name or "").strip() or not (last_name or "").strip():
            errors.append("First name and last name are required")
        return errors

    def list_players(self) -> ApiResult:
        return self.store.list_players()

    def create_player(self, first_name: Optional[str], last_name: Optional[str],
                      position: Optional[str] = None) -> ApiResult:
        """
        Register a new player.

        Raises:
            PlayerValidationError: If either name is missing
        """
        errors = self.validate_player(first_name, last_name)
        if errors:
            raise PlayerValidationError("; ".join(errors))

        payload = {"firstName": first_name.strip(), "lastName": last_name.strip()}
        if position:
            payload["position"] = position
        result = self.store.create_player(payload)
        if result.ok:
            logger.info("Registered player %s %s", payload["firstName"], payload["lastName"])
        return result

    def delete_player(self, player_id: int) -> ApiResult:
        return self.store.delete_player(player_id)

    @staticmethod
    def available_players(players: List[Player], roster: List[RosterPlayer]) -> List[Player]:
        """Players not yet on the roster, sorted by name."""
        on_roster = {entry.player_id for entry in roster}
        available = [p for p in players if p.id not in on_roster]
        return sorted(available, key=lambda p: p.name.lower())
