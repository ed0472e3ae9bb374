"""
Unit tests for GameService.

Tests game scheduling, the UPCOMING -> LIVE -> ENDED lifecycle, playing
time lookup and the post-game summary.
"""
import unittest

from poolside.models import ErrorKind, EventType, Game, GameStatus, Player, StatEvent, Substitution
from poolside.services.game_service import GameService, GameValidationError

from fakes import FakeGameStore, make_roster

GAME_ID = 1


class TestGameService(unittest.TestCase):
    """Test cases for GameService functionality."""

    def setUp(self) -> None:
        """Set up one upcoming game with a three-player roster."""
        self.game = Game(id=GAME_ID, date="2026-03-01", opponent="Riverside")
        self.store = FakeGameStore(roster=make_roster(3), games=[self.game])
        self.service = GameService(self.store)

    def test_validate_game_entry(self) -> None:
        """Test opponent and date are both required."""
        self.assertEqual(self.service.validate_game_entry("Riverside", "2026-03-08"), [])
        self.assertEqual(self.service.validate_game_entry(" ", "2026-03-08"), ["Opponent and date are required"])
        self.assertEqual(self.service.validate_game_entry("Riverside", None), ["Opponent and date are required"])

    def test_create_game_validates_before_calling_store(self) -> None:
        """Test a missing opponent raises without a remote call."""
        with self.assertRaises(GameValidationError):
            self.service.create_game("", "2026-03-08")
        self.assertEqual(self.store.calls_to("create_game"), [])

    def test_create_game_sends_trimmed_payload(self) -> None:
        """Test optional fields are only sent when given."""
        result = self.service.create_game(" Lakeside ", "2026-03-08", home_or_away="AWAY")

        self.assertTrue(result.ok)
        (payload,), = self.store.calls_to("create_game")
        self.assertEqual(payload, {"opponent": "Lakeside", "date": "2026-03-08", "homeOrAway": "AWAY"})
        self.assertEqual(result.value.opponent, "Lakeside")
        self.assertIs(result.value.status, GameStatus.UPCOMING)

    def test_delete_game(self) -> None:
        """Test deleting a game removes it from the store."""
        self.assertTrue(self.service.delete_game(GAME_ID).ok)
        self.assertEqual(self.store.calls_to("delete_game"), [(GAME_ID,)])
        self.assertEqual(self.store.games, [])

    def test_start_and_end_follow_lifecycle(self) -> None:
        """Test each transition requires the preceding status."""
        self.assertIs(self.service.end_game(GAME_ID).error, ErrorKind.VALIDATION)
        self.assertTrue(self.service.start_game(GAME_ID).ok)
        self.assertIs(self.game.status, GameStatus.LIVE)
        self.assertIs(self.service.start_game(GAME_ID).error, ErrorKind.VALIDATION)
        self.assertTrue(self.service.end_game(GAME_ID).ok)
        self.assertIs(self.game.status, GameStatus.ENDED)
        self.assertEqual(len(self.store.calls_to("start_game")), 1)
        self.assertEqual(len(self.store.calls_to("end_game")), 1)

    def test_unknown_game_fails(self) -> None:
        """Test a transition on a missing game makes no status call."""
        self.assertFalse(self.service.start_game(404).ok)
        self.assertEqual(self.store.calls_to("start_game"), [])

    def test_playing_times_default_to_zero(self) -> None:
        """Test unavailable playing times count as zero."""
        self.store.playing_time = {1: 300}
        self.assertEqual(self.service.playing_times(GAME_ID, [1, 2]), {1: 300, 2: 0})

    def test_build_summary_keeps_store_order(self) -> None:
        """Test summary rows follow the store's order and labels."""
        self.store.stats = [
            StatEvent(id=7, type=EventType.STEAL, player_id=2, game_id=GAME_ID, period=1, clock=6.5),
            StatEvent(id=8, type=EventType.GOAL, player_id=3, game_id=GAME_ID, period=2, clock=0.25,
                      player=Player(id=3, name="Mia Chen")),
        ]
        self.store.substitutions = [
            Substitution(id=1, period=1, time=95, player_in_id=3, player_out_id=2,
                         player_in_name="Mia Chen", player_out_name="Player 2"),
        ]
        self.store.playing_time = {2: 95}

        result = self.service.build_summary(GAME_ID)

        self.assertTrue(result.ok)
        summary = result.value
        self.assertEqual([row.event_id for row in summary.events], [7, 8])
        self.assertEqual(summary.events[0].player_name, "Player 2")
        self.assertEqual(summary.events[0].clock_label, "6:30")
        self.assertEqual(summary.events[0].period_label, "Q1")
        self.assertEqual(summary.events[1].player_name, "Mia Chen")
        self.assertEqual(summary.events[1].period_label, "Q2")
        self.assertEqual(summary.substitutions[0].time_label, "6:25")
        self.assertEqual(summary.playing_time_seconds, {1: 0, 2: 95, 3: 0})
        self.assertEqual(summary.to_dict()["playingTime"]["2"], {"seconds": 95, "label": "1:35"})

    def test_build_summary_propagates_failure(self) -> None:
        """Test a failed fetch fails the whole summary."""
        self.store.fail("list_stats")
        self.assertIs(self.service.build_summary(GAME_ID).error, ErrorKind.RESPONSE)


if __name__ == "__main__":
    unittest.main()
