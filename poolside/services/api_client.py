"""
HTTP client for the remote water-polo stats API.

Every method performs exactly one request and returns the decoded JSON
payload (unwrapped from a ``{"data": ...}`` envelope when present). Failures
raise ``ApiError``; turning those into results is the store's job.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ..config import AppConfig

logger = logging.getLogger(__name__)

WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class ApiError(Exception):
    """Base exception for failed remote calls."""
    pass


class ApiConnectionError(ApiError):
    """The request never produced a response (network failure, timeout)."""
    pass


class ApiResponseError(ApiError):
    """The API answered with a non-success status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class StatsApiClient:
    """Thin wrapper over ``requests`` for the stats API routes."""

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.cookies.set("token", token)

    @classmethod
    def from_config(cls, config: AppConfig) -> "StatsApiClient":
        return cls(config.api_url, token=config.api_token, timeout=config.http_timeout)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def request(self, route: str, method: str = "GET", data: Optional[Dict[str, Any]] = None) -> Any:
        """Perform one request against ``{base_url}/{route}`` and decode the payload."""

        url = f"{self.base_url}/{route.lstrip('/')}"
        body = data if data is not None and method in WRITE_METHODS else None
        try:
            response = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ApiConnectionError(f"{method} {route} failed: {exc}") from exc

        if not response.ok:
            raise ApiResponseError(_error_message(response), response.status_code)

        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiResponseError(f"Invalid JSON from {route}", response.status_code) from exc
        if isinstance(payload, dict) and payload.get("data") is not None:
            return payload["data"]
        return payload

    # ------------------------------------------------------------------
    # Stat events
    # ------------------------------------------------------------------
    def list_stats(self, game_id: int) -> List[Dict[str, Any]]:
        return self.request(f"games/{game_id}/stats")

    def create_stat(self, game_id: int, payload: Dict[str, Any]) -> Any:
        return self.request(f"games/{game_id}/stats", "POST", payload)

    def update_stat(self, game_id: int, stat_id: int, payload: Dict[str, Any]) -> Any:
        return self.request(f"games/{game_id}/stats/{stat_id}", "PUT", payload)

    def delete_stat(self, game_id: int, stat_id: int) -> Any:
        return self.request(f"games/{game_id}/stats/{stat_id}", "DELETE")

    # ------------------------------------------------------------------
    # Substitutions and lineups
    # ------------------------------------------------------------------
    def list_substitutions(self, game_id: int) -> List[Dict[str, Any]]:
        return self.request(f"games/{game_id}/substitutions")

    def create_substitution(self, game_id: int, payload: Dict[str, Any]) -> Any:
        return self.request(f"games/{game_id}/substitutions", "POST", payload)

    def get_playing_time(self, game_id: int, player_id: int) -> Dict[str, Any]:
        return self.request(f"games/{game_id}/players/{player_id}/playing-time")

    def get_starting_lineup(self, game_id: int, period: int) -> List[Dict[str, Any]]:
        return self.request(f"games/{game_id}/starting-lineup/{period}")

    def save_starting_lineup(self, game_id: int, payload: Dict[str, Any]) -> Any:
        return self.request(f"games/{game_id}/starting-lineup", "POST", payload)

    # ------------------------------------------------------------------
    # Roster, presets and games
    # ------------------------------------------------------------------
    def list_players(self) -> List[Dict[str, Any]]:
        return self.request("players")

    def get_player(self, player_id: int) -> Dict[str, Any]:
        return self.request(f"players/{player_id}")

    def create_player(self, payload: Dict[str, Any]) -> Any:
        return self.request("players", "POST", payload)

    def delete_player(self, player_id: int) -> Any:
        return self.request(f"players/{player_id}", "DELETE")

    def get_roster(self, game_id: int) -> List[Dict[str, Any]]:
        return self.request(f"games/{game_id}/roster")

    def add_to_roster(self, game_id: int, player_id: int, cap_number: int) -> Any:
        payload = {"roster": [{"playerId": player_id, "capNumber": cap_number}]}
        return self.request(f"games/{game_id}/roster", "POST", payload)

    def remove_from_roster(self, game_id: int, roster_id: int) -> Any:
        return self.request(f"games/{game_id}/roster/{roster_id}", "DELETE")

    def list_presets(self) -> List[Dict[str, Any]]:
        return self.request("roster-presets")

    def get_preset(self, preset_id: int) -> Dict[str, Any]:
        return self.request(f"roster-presets/{preset_id}")

    def save_preset(self, name: str, roster: List[Dict[str, int]]) -> Any:
        return self.request("roster-presets", "POST", {"name": name, "roster": roster})

    def delete_preset(self, preset_id: int) -> Any:
        return self.request(f"roster-presets/{preset_id}", "DELETE")

    def list_games(self) -> List[Dict[str, Any]]:
        return self.request("games")

    def get_game(self, game_id: int) -> Dict[str, Any]:
        return self.request(f"games/{game_id}")

    def create_game(self, payload: Dict[str, Any]) -> Any:
        return self.request("games", "POST", payload)

    def delete_game(self, game_id: int) -> Any:
        return self.request(f"games/{game_id}", "DELETE")

    def start_game(self, game_id: int) -> Any:
        return self.request(f"games/{game_id}/start", "PATCH")

    def end_game(self, game_id: int) -> Any:
        return self.request(f"games/{game_id}/end", "PATCH")


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Error {response.status_code}"
