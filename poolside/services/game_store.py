"""
Result-returning facade over the stats API client.

Every remote call goes through ``GameStore._call`` which converts raised
``ApiError`` into ``ApiResult.failure`` so that call sites branch on a typed
result instead of catching exceptions. Payloads are parsed into models here.

The narrower ``EventStore``, ``SubstitutionStore`` and ``TrackerSource``
protocols describe the slice of the store each live-tracker component uses.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from ..models import (
    ApiResult, ErrorKind, Game, Player, RosterPlayer, RosterPreset, StatEvent, Substitution,
    lineup_from_payload, lineup_to_payload
)
from .api_client import ApiConnectionError, ApiError, StatsApiClient

logger = logging.getLogger(__name__)


class EventStore(Protocol):
    """Stat event operations used by the event engine."""

    def list_stats(self, game_id: int) -> ApiResult: ...

    def create_stat(self, game_id: int, payload: Dict[str, Any]) -> ApiResult: ...

    def update_stat(self, game_id: int, stat_id: int, payload: Dict[str, Any]) -> ApiResult: ...

    def delete_stat(self, game_id: int, stat_id: int) -> ApiResult: ...


class SubstitutionStore(Protocol):
    """Substitution and lineup operations used by the lineup tracker."""

    def create_substitution(self, game_id: int, payload: Dict[str, Any]) -> ApiResult: ...

    def save_starting_lineup(self, game_id: int, period: int, player_ids: List[int]) -> ApiResult: ...


class TrackerSource(EventStore, SubstitutionStore, Protocol):
    """Everything the live tracker needs to load and run."""

    def get_roster(self, game_id: int) -> ApiResult: ...

    def list_substitutions(self, game_id: int) -> ApiResult: ...

    def get_starting_lineup(self, game_id: int, period: int) -> ApiResult: ...


class GameStore:
    """Remote store for one authenticated session."""

    def __init__(self, client: StatsApiClient):
        self.client = client

    def _call(self, description: str, func: Callable[[], Any],
              parse: Optional[Callable[[Any], Any]] = None) -> ApiResult:
        """Run one client call and wrap its outcome."""
        try:
            payload = func()
        except ApiConnectionError as exc:
            logger.warning("%s failed: %s", description, exc)
            return ApiResult.failure(ErrorKind.CONNECTION, str(exc))
        except ApiError as exc:
            logger.warning("%s rejected: %s", description, exc)
            return ApiResult.failure(ErrorKind.RESPONSE, str(exc) or f"Failed to {description}")

        if parse is None:
            return ApiResult.success(payload)
        try:
            return ApiResult.success(parse(payload))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("%s returned an unexpected payload: %s", description, exc)
            return ApiResult.failure(ErrorKind.RESPONSE, f"Unexpected response to {description}")

    # ------------------------------------------------------------------
    # Stat events
    # ------------------------------------------------------------------
    def list_stats(self, game_id: int) -> ApiResult:
        return self._call("list stats", lambda: self.client.list_stats(game_id), _parse_events)

    def create_stat(self, game_id: int, payload: Dict[str, Any]) -> ApiResult:
        return self._call("record stat", lambda: self.client.create_stat(game_id, payload), _parse_event)

    def update_stat(self, game_id: int, stat_id: int, payload: Dict[str, Any]) -> ApiResult:
        return self._call(
            "update stat", lambda: self.client.update_stat(game_id, stat_id, payload), _parse_event
        )

    def delete_stat(self, game_id: int, stat_id: int) -> ApiResult:
        return self._call("delete stat", lambda: self.client.delete_stat(game_id, stat_id))

    # ------------------------------------------------------------------
    # Substitutions and lineups
    # ------------------------------------------------------------------
    def list_substitutions(self, game_id: int) -> ApiResult:
        return self._call(
            "list substitutions",
            lambda: self.client.list_substitutions(game_id),
            lambda payload: [Substitution.from_dict(s) for s in payload or []],
        )

    def create_substitution(self, game_id: int, payload: Dict[str, Any]) -> ApiResult:
        return self._call("record substitution", lambda: self.client.create_substitution(game_id, payload))

    def get_playing_time(self, game_id: int, player_id: int) -> ApiResult:
        return self._call(
            "get playing time",
            lambda: self.client.get_playing_time(game_id, player_id),
            lambda payload: int((payload or {}).get("playingTime") or 0),
        )

    def get_starting_lineup(self, game_id: int, period: int) -> ApiResult:
        return self._call(
            "get starting lineup",
            lambda: self.client.get_starting_lineup(game_id, period),
            lambda payload: lineup_from_payload(payload or []),
        )

    def save_starting_lineup(self, game_id: int, period: int, player_ids: List[int]) -> ApiResult:
        payload = lineup_to_payload(period, player_ids)
        return self._call("save lineup", lambda: self.client.save_starting_lineup(game_id, payload))

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------
    def list_players(self) -> ApiResult:
        return self._call(
            "list players", self.client.list_players,
            lambda payload: [Player.from_dict(p) for p in payload or []],
        )

    def get_player(self, player_id: int) -> ApiResult:
        return self._call("get player", lambda: self.client.get_player(player_id), Player.from_dict)

    def create_player(self, payload: Dict[str, Any]) -> ApiResult:
        return self._call(
            "create player", lambda: self.client.create_player(payload),
            lambda created: _parse_created(created, Player.from_dict),
        )

    def delete_player(self, player_id: int) -> ApiResult:
        return self._call("delete player", lambda: self.client.delete_player(player_id))

    # ------------------------------------------------------------------
    # Roster, presets and games
    # ------------------------------------------------------------------
    def get_roster(self, game_id: int) -> ApiResult:
        return self._call(
            "get roster",
            lambda: self.client.get_roster(game_id),
            lambda payload: [RosterPlayer.from_dict(r) for r in payload or []],
        )

    def add_to_roster(self, game_id: int, player_id: int, cap_number: int) -> ApiResult:
        return self._call(
            "add player to roster", lambda: self.client.add_to_roster(game_id, player_id, cap_number)
        )

    def remove_from_roster(self, game_id: int, roster_id: int) -> ApiResult:
        return self._call("remove player", lambda: self.client.remove_from_roster(game_id, roster_id))

    def list_presets(self) -> ApiResult:
        return self._call(
            "list presets",
            self.client.list_presets,
            lambda payload: [RosterPreset.from_dict(p) for p in payload or []],
        )

    def get_preset(self, preset_id: int) -> ApiResult:
        return self._call("get preset", lambda: self.client.get_preset(preset_id), RosterPreset.from_dict)

    def save_preset(self, name: str, roster: List[Dict[str, int]]) -> ApiResult:
        return self._call("save preset", lambda: self.client.save_preset(name, roster))

    def delete_preset(self, preset_id: int) -> ApiResult:
        return self._call("delete preset", lambda: self.client.delete_preset(preset_id))

    def list_games(self) -> ApiResult:
        return self._call(
            "list games", self.client.list_games,
            lambda payload: [Game.from_dict(g) for g in payload or []],
        )

    def get_game(self, game_id: int) -> ApiResult:
        return self._call("get game", lambda: self.client.get_game(game_id), Game.from_dict)

    def create_game(self, payload: Dict[str, Any]) -> ApiResult:
        return self._call(
            "create game", lambda: self.client.create_game(payload),
            lambda created: _parse_created(created, Game.from_dict),
        )

    def delete_game(self, game_id: int) -> ApiResult:
        return self._call("delete game", lambda: self.client.delete_game(game_id))

    def start_game(self, game_id: int) -> ApiResult:
        return self._call("start game", lambda: self.client.start_game(game_id))

    def end_game(self, game_id: int) -> ApiResult:
        return self._call("end game", lambda: self.client.end_game(game_id))


def _parse_events(payload: Any) -> List[StatEvent]:
    return [StatEvent.from_dict(e) for e in payload or []]


def _parse_event(payload: Any) -> Optional[StatEvent]:
    """Parse the created/updated event when the API echoes it back."""
    if isinstance(payload, dict) and "id" in payload and "type" in payload:
        return StatEvent.from_dict(payload)
    return None


def _parse_created(payload: Any, parse: Callable[[Dict[str, Any]], Any]) -> Any:
    """Parse a created record when the API echoes it back, else None."""
    if isinstance(payload, dict) and "id" in payload:
        return parse(payload)
    return None
