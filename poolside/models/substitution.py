"""Substitution and lineup models."""
from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class Substitution:
    """One player leaving and one entering, tagged with period and seconds elapsed."""
    id: int
    period: int
    time: int
    player_in_id: int
    player_out_id: int
    player_in_name: str = ""
    player_out_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "period": self.period,
            "time": self.time,
            "playerInId": self.player_in_id,
            "playerOutId": self.player_out_id,
            "playerIn": {"id": self.player_in_id, "name": self.player_in_name},
            "playerOut": {"id": self.player_out_id, "name": self.player_out_name},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Substitution':
        """Create from an API payload."""
        player_in = data.get("playerIn") or {}
        player_out = data.get("playerOut") or {}
        return cls(
            id=int(data.get("id", 0)),
            period=int(data.get("period", 1)),
            time=int(data.get("time", 0)),
            player_in_id=int(data.get("playerInId", player_in.get("id", 0))),
            player_out_id=int(data.get("playerOutId", player_out.get("id", 0))),
            player_in_name=player_in.get("name", ""),
            player_out_name=player_out.get("name", ""),
        )


def lineup_from_payload(payload: List[Dict[str, Any]]) -> List[int]:
    """Extract the player ids from a starting-lineup payload."""
    return [int(entry["playerId"]) for entry in payload]


def lineup_to_payload(period: int, player_ids: List[int]) -> Dict[str, Any]:
    """Build the save-lineup request body."""
    return {
        "period": period,
        "lineup": [{"playerId": player_id} for player_id in player_ids],
    }
