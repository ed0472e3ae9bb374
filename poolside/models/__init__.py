"""
Models package for the Poolside Stat Tracker.

This package contains the core data models used throughout the application.
"""
from .roster import Player, RosterPlayer, is_goalkeeper, sort_by_cap
from .stat_event import (
    EventType, SituationContext, ShotOutcome, EventButton, EVENT_BUTTONS,
    SITUATION_LABELS, StatEvent, ShotRecord
)
from .substitution import Substitution, lineup_from_payload, lineup_to_payload
from .game import Game, GameStatus, RosterPreset
from .game_report import EventSummaryRow, SubstitutionSummaryRow, GameSummary
from .result import ApiResult, ErrorKind
from .tracker_state import (
    TrackerState, EntryContext, RecordingStatus, LineupState, TAB_STATS, TAB_SUBS
)

__all__ = [
    "Player", "RosterPlayer", "is_goalkeeper", "sort_by_cap",
    "EventType", "SituationContext", "ShotOutcome", "EventButton", "EVENT_BUTTONS",
    "SITUATION_LABELS", "StatEvent", "ShotRecord",
    "Substitution", "lineup_from_payload", "lineup_to_payload",
    "Game", "GameStatus", "RosterPreset",
    "EventSummaryRow", "SubstitutionSummaryRow", "GameSummary",
    "ApiResult", "ErrorKind",
    "TrackerState", "EntryContext", "RecordingStatus", "LineupState", "TAB_STATS", "TAB_SUBS"
]
