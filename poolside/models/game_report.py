"""Dataclasses representing the post-game summary."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..utils.time_utils import fmt_mmss
from .game import Game


@dataclass
class EventSummaryRow:
    """One line of the post-game event log."""

    event_id: int
    event_type: str
    player_id: int
    player_name: str
    cap_number: Optional[int]
    period_label: str
    clock_label: str
    context: Optional[str] = None
    shot_outcome: Optional[str] = None


@dataclass
class SubstitutionSummaryRow:
    """One line of the post-game substitution log."""

    period: int
    time_label: str
    player_in_name: str
    player_out_name: str


@dataclass
class GameSummary:
    """Snapshot of a game's recorded events, in store order."""

    game: Game
    events: List[EventSummaryRow] = field(default_factory=list)
    substitutions: List[SubstitutionSummaryRow] = field(default_factory=list)
    playing_time_seconds: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "game": self.game.to_dict(),
            "events": [asdict(row) for row in self.events],
            "substitutions": [asdict(row) for row in self.substitutions],
            "playingTime": {
                str(player_id): {"seconds": seconds, "label": fmt_mmss(seconds)}
                for player_id, seconds in self.playing_time_seconds.items()
            },
        }
