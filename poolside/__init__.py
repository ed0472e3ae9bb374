"""
Poolside Stat Tracker

Live stat entry for water polo games: records player events, captures shot
locations and tracks who is in the water, backed by a remote stats API.
"""
from .config import AppConfig, configure_logging
from .models import RosterPlayer, StatEvent, Substitution
from .services import GameStore, LiveTracker, ServiceFactory, StatsApiClient
from .ui import create_app, run_web_app
from .utils import fmt_mmss, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "AppConfig", "configure_logging", "RosterPlayer", "StatEvent", "Substitution",
    "GameStore", "LiveTracker", "ServiceFactory", "StatsApiClient",
    "create_app", "run_web_app", "fmt_mmss", "APP_TITLE"
]
