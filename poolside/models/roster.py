"""
Roster models for the Poolside Stat Tracker application.

This module contains the Player and RosterPlayer dataclasses. A RosterPlayer
is a player's assignment to one game, identified by a cap number.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils.constants import GOALKEEPER_CAPS


def is_goalkeeper(cap_number: Optional[int]) -> bool:
    """Return True when the cap number is one conventionally worn by goalkeepers."""
    return cap_number in GOALKEEPER_CAPS


@dataclass
class Player:
    """A registered player, independent of any game."""
    id: int
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    position: Optional[str] = None

    @property
    def short_name(self) -> str:
        """First word of the display name, as shown on player buttons."""
        return self.name.split(" ")[0] if self.name else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "shortName": self.short_name,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "position": self.position,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Player':
        """Create from an API payload."""
        data = data or {}
        first_name = data.get("firstName") or ""
        last_name = data.get("lastName") or ""
        name = data.get("name") or f"{first_name} {last_name}".strip()
        return cls(
            id=int(data.get("id", 0)),
            name=name,
            first_name=first_name,
            last_name=last_name,
            position=data.get("position"),
        )


@dataclass
class RosterPlayer:
    """
    A player's assignment to a single game.

    Attributes:
        id: Roster entry id (used to remove the entry)
        player_id: Referenced player id (used for stats and lineups)
        cap_number: Cap worn for this game (1-99)
        player: Nested player details
    """
    id: int
    player_id: int
    cap_number: int
    player: Player = field(default_factory=lambda: Player(id=0))

    @property
    def is_goalkeeper(self) -> bool:
        return is_goalkeeper(self.cap_number)

    @property
    def label(self) -> str:
        """Human readable ``#cap name`` label used in confirmations."""
        return f"#{self.cap_number} {self.player.name}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "playerId": self.player_id,
            "capNumber": self.cap_number,
            "isGoalkeeper": self.is_goalkeeper,
            "player": self.player.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RosterPlayer':
        """Create from an API payload."""
        player_data = data.get("player") or {"id": data.get("playerId", 0)}
        player = Player.from_dict(player_data)
        return cls(
            id=int(data.get("id", 0)),
            player_id=int(data.get("playerId", player.id)),
            cap_number=int(data.get("capNumber", 0)),
            player=player,
        )


def sort_by_cap(roster: List[RosterPlayer]) -> List[RosterPlayer]:
    """Return roster entries ordered by cap number."""
    return sorted(roster, key=lambda r: r.cap_number)
