"""
Services package for the Poolside Stat Tracker.

This package contains the API client, the result-returning store and the
service classes that handle the live-tracker, roster, player and game workflows.
"""
from .api_client import ApiConnectionError, ApiError, ApiResponseError, StatsApiClient
from .game_store import GameStore
from .event_engine import EventRecordingEngine
from .shot_wizard import ShotWizard, WizardState, WizardStep, InvalidTransition, transition
from .lineup_tracker import LineupTracker
from .live_tracker import LiveTracker, TrackerInputError, TrackerLoadError
from .roster_service import RosterService, RosterValidationError
from .player_service import PlayerService, PlayerValidationError
from .game_service import GameService, GameValidationError
from .service_factory import ServiceFactory

__all__ = [
    "ApiError", "ApiConnectionError", "ApiResponseError", "StatsApiClient",
    "GameStore", "EventRecordingEngine",
    "ShotWizard", "WizardState", "WizardStep", "InvalidTransition", "transition",
    "LineupTracker", "LiveTracker", "TrackerInputError", "TrackerLoadError",
    "RosterService", "RosterValidationError", "PlayerService", "PlayerValidationError",
    "GameService", "GameValidationError", "ServiceFactory"
]
