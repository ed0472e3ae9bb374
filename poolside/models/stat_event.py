"""
Stat event models for the Poolside Stat Tracker application.

This module contains the event, situation and shot-outcome enumerations,
the StatEvent dataclass and the ShotRecord emitted by the shot wizard.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .roster import Player


class EventType(Enum):
    """Kinds of in-game occurrence that can be recorded."""
    GOAL = "GOAL"
    SHOT = "SHOT"
    SAVE = "SAVE"
    STEAL = "STEAL"
    BLOCK = "BLOCK"
    EXCLUSION = "EXCLUSION"
    TURNOVER = "TURNOVER"
    ASSIST = "ASSIST"

    @property
    def is_shot(self) -> bool:
        """GOAL and SHOT go through the shot wizard instead of being recorded directly."""
        return self in (EventType.GOAL, EventType.SHOT)


class SituationContext(Enum):
    """Tactical situation during which an event occurred. NORMAL is sent as no context."""
    NORMAL = ""
    SIX_ON_SIX = "SIX_ON_SIX"
    MAN_UP = "MAN_UP"
    MAN_DOWN = "MAN_DOWN"
    COUNTER = "COUNTER"
    PENALTY = "PENALTY"

    @property
    def wire_value(self) -> Optional[str]:
        return self.value or None

    @classmethod
    def parse(cls, value: Optional[str]) -> 'SituationContext':
        if not value:
            return cls.NORMAL
        return cls(value)


SITUATION_LABELS = {
    SituationContext.NORMAL: "Normal",
    SituationContext.SIX_ON_SIX: "6v6",
    SituationContext.MAN_UP: "Man Up",
    SituationContext.MAN_DOWN: "Man Down",
    SituationContext.COUNTER: "Counter",
    SituationContext.PENALTY: "Penalty",
}


class ShotOutcome(Enum):
    """Terminal result of a shot attempt."""
    GOAL = "GOAL"
    SAVED = "SAVED"
    MISSED = "MISSED"
    BLOCKED = "BLOCKED"
    POST = "POST"


@dataclass(frozen=True)
class EventButton:
    """An event-type button and which players it applies to."""
    event_type: EventType
    label: str
    gk_only: bool = False
    field_only: bool = False

    def applies_to(self, goalkeeper: bool) -> bool:
        if self.gk_only and not goalkeeper:
            return False
        if self.field_only and goalkeeper:
            return False
        return True


EVENT_BUTTONS: List[EventButton] = [
    EventButton(EventType.GOAL, "Goal"),
    EventButton(EventType.SHOT, "Shot"),
    EventButton(EventType.SAVE, "Save", gk_only=True),
    EventButton(EventType.STEAL, "Steal"),
    EventButton(EventType.BLOCK, "Block", field_only=True),
    EventButton(EventType.EXCLUSION, "Exclusion"),
    EventButton(EventType.TURNOVER, "Turnover"),
]


@dataclass
class StatEvent:
    """One recorded in-game occurrence, as stored by the remote API."""
    id: int
    type: EventType
    player_id: int
    game_id: int
    period: Optional[int] = None
    clock: Optional[float] = None
    context: SituationContext = SituationContext.NORMAL
    x: Optional[float] = None
    y: Optional[float] = None
    goal_x: Optional[float] = None
    goal_y: Optional[float] = None
    shot_outcome: Optional[ShotOutcome] = None
    assist_event_id: Optional[int] = None
    player: Optional[Player] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "playerId": self.player_id,
            "gameId": self.game_id,
            "period": self.period,
            "clock": self.clock,
            "context": self.context.wire_value,
            "x": self.x,
            "y": self.y,
            "goalX": self.goal_x,
            "goalY": self.goal_y,
            "shotOutcome": self.shot_outcome.value if self.shot_outcome else None,
            "assistEventId": self.assist_event_id,
            "player": self.player.to_dict() if self.player else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StatEvent':
        """Create from an API payload."""
        outcome = data.get("shotOutcome")
        clock = data.get("clock")
        player_data = data.get("player")
        return cls(
            id=int(data["id"]),
            type=EventType(data["type"]),
            player_id=int(data.get("playerId", 0)),
            game_id=int(data.get("gameId", 0)),
            period=data.get("period"),
            clock=float(clock) if clock is not None else None,
            context=SituationContext.parse(data.get("context")),
            x=data.get("x"),
            y=data.get("y"),
            goal_x=data.get("goalX"),
            goal_y=data.get("goalY"),
            shot_outcome=ShotOutcome(outcome) if outcome else None,
            assist_event_id=data.get("assistEventId"),
            player=Player.from_dict(player_data) if player_data else None,
        )


@dataclass(frozen=True)
class ShotRecord:
    """A completed shot emitted by the shot wizard."""
    pool_x: float
    pool_y: float
    goal_x: float
    goal_y: float
    outcome: ShotOutcome
    assister_id: Optional[int] = None
