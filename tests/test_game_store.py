"""
Unit tests for GameStore.

The API client is mocked so that payload parsing and the mapping of raised
API errors to failed results can be checked directly.
"""
import unittest
from unittest.mock import MagicMock

from poolside.models import ErrorKind, EventType, GameStatus, SituationContext
from poolside.services.api_client import ApiConnectionError, ApiResponseError, StatsApiClient
from poolside.services.game_store import GameStore


class TestGameStore(unittest.TestCase):
    """Test cases for GameStore parsing and error wrapping."""

    def setUp(self) -> None:
        """Set up a store over a mocked client."""
        self.client = MagicMock(spec=StatsApiClient)
        self.store = GameStore(self.client)

    def test_list_stats_parses_events(self) -> None:
        """Test stat payloads become StatEvent models."""
        self.client.list_stats.return_value = [
            {"id": 1, "type": "EXCLUSION", "playerId": 4, "gameId": 2, "period": 3,
             "clock": 4.5, "context": "MAN_DOWN", "player": {"id": 4, "name": "Ana Ruiz"}},
        ]
        result = self.store.list_stats(2)
        self.assertTrue(result.ok)
        event = result.value[0]
        self.assertIs(event.type, EventType.EXCLUSION)
        self.assertIs(event.context, SituationContext.MAN_DOWN)
        self.assertEqual(event.player.name, "Ana Ruiz")

    def test_connection_error_becomes_failure(self) -> None:
        """Test connection errors are returned as CONNECTION failures."""
        self.client.create_stat.side_effect = ApiConnectionError("timed out")
        result = self.store.create_stat(2, {"playerId": 4, "type": "STEAL"})
        self.assertFalse(result.ok)
        self.assertIs(result.error, ErrorKind.CONNECTION)
        self.assertEqual(result.message, "timed out")

    def test_response_error_becomes_failure(self) -> None:
        """Test rejected requests are logged and returned as RESPONSE failures."""
        self.client.delete_stat.side_effect = ApiResponseError("Not found", 404)
        with self.assertLogs("poolside.services.game_store", level="WARNING"):
            result = self.store.delete_stat(2, 8)
        self.assertIs(result.error, ErrorKind.RESPONSE)
        self.assertEqual(result.message, "Not found")

    def test_create_without_echo_returns_none(self) -> None:
        """Test a create that does not echo the event yields None."""
        self.client.create_stat.return_value = {"success": True}
        result = self.store.create_stat(2, {"playerId": 4, "type": "STEAL"})
        self.assertTrue(result.ok)
        self.assertIsNone(result.value)

    def test_unexpected_payload_is_a_response_failure(self) -> None:
        """Test a malformed payload fails instead of raising."""
        self.client.get_roster.return_value = [{"capNumber": "seven"}]
        result = self.store.get_roster(2)
        self.assertIs(result.error, ErrorKind.RESPONSE)

    def test_lineup_round_trip_shapes(self) -> None:
        """Test lineups are read as ids and sent as player entries."""
        self.client.get_starting_lineup.return_value = [{"playerId": 3}, {"playerId": 5}]
        self.assertEqual(self.store.get_starting_lineup(2, 1).value, [3, 5])

        self.store.save_starting_lineup(2, 1, [3, 5])
        self.client.save_starting_lineup.assert_called_once_with(
            2, {"period": 1, "lineup": [{"playerId": 3}, {"playerId": 5}]}
        )

    def test_playing_time_defaults_to_zero(self) -> None:
        """Test a null playing time reads as zero."""
        self.client.get_playing_time.return_value = {"playingTime": None}
        self.assertEqual(self.store.get_playing_time(2, 4).value, 0)
        self.client.get_playing_time.return_value = {"playingTime": 312}
        self.assertEqual(self.store.get_playing_time(2, 4).value, 312)

    def test_roster_and_games_are_parsed(self) -> None:
        """Test roster entries and games become models."""
        self.client.get_roster.return_value = [
            {"id": 11, "playerId": 4, "capNumber": 13, "player": {"id": 4, "firstName": "Ana", "lastName": "Ruiz"}},
        ]
        entry = self.store.get_roster(2).value[0]
        self.assertTrue(entry.is_goalkeeper)
        self.assertEqual(entry.label, "#13 Ana Ruiz")

        self.client.get_game.return_value = {"id": 2, "date": "2026-03-01", "opponent": "Riverside", "status": "LIVE"}
        self.assertIs(self.store.get_game(2).value.status, GameStatus.LIVE)

    def test_players_are_parsed(self) -> None:
        """Test player payloads become Player models with a display name."""
        self.client.list_players.return_value = [
            {"id": 4, "firstName": "Ana", "lastName": "Ruiz", "position": "CENTER"},
        ]
        player = self.store.list_players().value[0]
        self.assertEqual(player.name, "Ana Ruiz")
        self.assertEqual(player.short_name, "Ana")
        self.assertEqual(player.to_dict()["shortName"], "Ana")

    def test_created_player_and_game_are_parsed_when_echoed(self) -> None:
        """Test echoed records are parsed and bare acknowledgements yield None."""
        self.client.create_player.return_value = {"id": 9, "firstName": "Lea", "lastName": "Novak"}
        self.assertEqual(self.store.create_player({"firstName": "Lea"}).value.id, 9)

        self.client.create_game.return_value = {"success": True}
        result = self.store.create_game({"opponent": "Lakeside", "date": "2026-03-08"})
        self.assertTrue(result.ok)
        self.assertIsNone(result.value)

    def test_delete_game_failure(self) -> None:
        """Test a rejected delete is returned as a failure."""
        self.client.delete_game.side_effect = ApiResponseError("Game has stats", 409)
        with self.assertLogs("poolside.services.game_store", level="WARNING"):
            result = self.store.delete_game(2)
        self.assertEqual(result.message, "Game has stats")


if __name__ == "__main__":
    unittest.main()
