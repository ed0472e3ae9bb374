"""Game and roster preset models for the Poolside Stat Tracker application."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .roster import RosterPlayer


class GameStatus(Enum):
    """Lifecycle of a game."""
    UPCOMING = "UPCOMING"
    LIVE = "LIVE"
    ENDED = "ENDED"


@dataclass
class Game:
    """A scheduled or played game against one opponent."""
    id: int
    date: str
    opponent: str
    status: GameStatus = GameStatus.UPCOMING
    location: Optional[str] = None
    home_or_away: Optional[str] = None
    team_score: int = 0
    opponent_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date,
            "opponent": self.opponent,
            "location": self.location,
            "homeOrAway": self.home_or_away,
            "status": self.status.value,
            "teamScore": self.team_score,
            "opponentScore": self.opponent_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        """Create from an API payload."""
        return cls(
            id=int(data["id"]),
            date=str(data.get("date", "")),
            opponent=str(data.get("opponent", "")),
            status=GameStatus(data.get("status", GameStatus.UPCOMING.value)),
            location=data.get("location"),
            home_or_away=data.get("homeOrAway"),
            team_score=int(data.get("teamScore") or 0),
            opponent_score=int(data.get("opponentScore") or 0),
        )


@dataclass
class RosterPreset:
    """A named, reusable roster."""
    id: int
    name: str
    players: List[RosterPlayer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RosterPreset':
        """Create from an API payload."""
        return cls(
            id=int(data["id"]),
            name=str(data.get("name", "")),
            players=[RosterPlayer.from_dict(p) for p in data.get("players", [])],
        )
