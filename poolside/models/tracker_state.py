"""
TrackerState model for the Poolside Stat Tracker application.

The live tracker keeps all of its cross-cutting UI state in one explicit
record. Each sub-component is handed only the slice it works on:

* ``EntryContext``: who/when/what situation the next stat is recorded for
* ``RecordingStatus``: in-flight flag, confirmation text and edit session
* ``LineupState``: in-water set and pending substitution pair
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .roster import RosterPlayer
from .stat_event import SituationContext, StatEvent
from .substitution import Substitution
from ..utils import clamp_minutes, clamp_seconds, clock_value, PERIOD_LENGTH_MIN

TAB_STATS = "stats"
TAB_SUBS = "subs"


@dataclass
class EntryContext:
    """Selection the next recorded stat applies to."""
    selected_player_id: Optional[int] = None
    period: int = 1
    minutes: int = PERIOD_LENGTH_MIN
    seconds: int = 0
    situation: SituationContext = SituationContext.NORMAL

    def set_clock(self, minutes: Optional[int] = None, seconds: Optional[int] = None) -> None:
        """Set either clock input; each is clamped independently."""
        if minutes is not None:
            self.minutes = clamp_minutes(minutes)
        if seconds is not None:
            self.seconds = clamp_seconds(seconds)

    def reset_clock(self) -> None:
        self.minutes = PERIOD_LENGTH_MIN
        self.seconds = 0

    @property
    def clock(self) -> float:
        return clock_value(self.minutes, self.seconds)


@dataclass
class RecordingStatus:
    """Feedback and edit-session state of the event engine."""
    recording: bool = False
    last_recorded: Optional[str] = None
    editing_event: Optional[StatEvent] = None

    @property
    def editing(self) -> bool:
        return self.editing_event is not None


@dataclass
class LineupState:
    """Who is in the water and the substitution being assembled."""
    in_water: List[int] = field(default_factory=list)
    pending_out: Optional[int] = None
    pending_in: Optional[int] = None
    submitting: bool = False

    def clear_pending(self) -> None:
        self.pending_out = None
        self.pending_in = None


@dataclass
class TrackerState:
    """
    Complete UI state of the live tracker for one game.

    Attributes:
        game_id: Game being tracked
        roster: Game roster
        events: Stat event log in store order
        substitutions: Substitution log in store order
        lineups: Saved starting lineup (player ids) per period
        entry: Selection slice
        status: Recording/edit slice
        lineup: In-water slice
        active_tab: "stats" or "subs"
        shot_player: Roster player currently going through the shot wizard
    """
    game_id: int
    roster: List[RosterPlayer] = field(default_factory=list)
    events: List[StatEvent] = field(default_factory=list)
    substitutions: List[Substitution] = field(default_factory=list)
    lineups: Dict[int, List[int]] = field(default_factory=dict)
    entry: EntryContext = field(default_factory=EntryContext)
    status: RecordingStatus = field(default_factory=RecordingStatus)
    lineup: LineupState = field(default_factory=LineupState)
    active_tab: str = TAB_STATS
    shot_player: Optional[RosterPlayer] = None

    def find_roster_player(self, player_id: Optional[int]) -> Optional[RosterPlayer]:
        """Look up a roster entry by player id."""
        if player_id is None:
            return None
        return next((r for r in self.roster if r.player_id == player_id), None)

    @property
    def wizard_open(self) -> bool:
        return self.shot_player is not None
