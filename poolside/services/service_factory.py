"""
Service Factory for dependency injection.

Builds the API client, the result-returning store and the services on top
of it from one ``AppConfig`` so that the web layer never wires them itself.
"""
from typing import Optional

from ..config import AppConfig
from .api_client import StatsApiClient
from .game_service import GameService
from .game_store import GameStore
from .live_tracker import LiveTracker
from .player_service import PlayerService
from .roster_service import RosterService


class ServiceFactory:
    """
    Factory for creating service instances sharing one remote store.

    Args:
        config: Runtime settings
        store: Optional pre-built store (tests inject a fake here)
    """

    def __init__(self, config: Optional[AppConfig] = None, store: Optional[GameStore] = None):
        """Initialize factory with default configurations."""
        self.config = config or AppConfig()
        self._store = store

    def create_roster_service(self) -> RosterService:
        return RosterService(self._get_store())

    def create_player_service(self) -> PlayerService:
        return PlayerService(self._get_store())

    def create_game_service(self) -> GameService:
        return GameService(self._get_store())

    def create_live_tracker(self, game_id: int) -> LiveTracker:
        """
        Load a live tracker for ``game_id``.

        Raises:
            TrackerLoadError: If the game's roster, events or substitutions cannot be fetched
        """
        return LiveTracker.load(self._get_store(), game_id)

    def _get_store(self) -> GameStore:
        """Get singleton store."""
        if self._store is None:
            self._store = GameStore(StatsApiClient.from_config(self.config))
        return self._store
