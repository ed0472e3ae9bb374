"""
Unit tests for the countdown clock helpers.
"""
import unittest

from poolside.utils import (
    clamp_minutes, clamp_seconds, clock_at_elapsed, clock_value, elapsed_in_period, fmt_mmss,
    format_clock, period_label, split_clock
)


class TestClockHelpers(unittest.TestCase):
    """Test cases for clock formatting, clamping and conversion."""

    def test_fmt_mmss(self) -> None:
        """Test M:SS formatting of second counts."""
        self.assertEqual(fmt_mmss(0), "0:00")
        self.assertEqual(fmt_mmss(5), "0:05")
        self.assertEqual(fmt_mmss(90), "1:30")
        self.assertEqual(fmt_mmss(-4), "0:00")

    def test_inputs_are_clamped(self) -> None:
        """Test minutes clamp to 0-8 and seconds to 0-59."""
        self.assertEqual(clamp_minutes(12), 8)
        self.assertEqual(clamp_minutes(-1), 0)
        self.assertEqual(clamp_seconds(75), 59)
        self.assertEqual(clamp_seconds(-3), 0)

    def test_clock_value_is_fractional_minutes(self) -> None:
        """Test clock inputs combine into fractional minutes."""
        self.assertEqual(clock_value(8, 0), 8.0)
        self.assertAlmostEqual(clock_value(5, 30), 5.5)

    def test_split_clock_rounds_and_carries(self) -> None:
        """Test a rounded-up remainder carries into the minute."""
        self.assertEqual(split_clock(5.5), (5, 30))
        self.assertEqual(split_clock(2.9999), (3, 0))
        self.assertEqual(split_clock(clock_value(3, 17)), (3, 17))

    def test_format_clock(self) -> None:
        """Test the event log label for stored clocks."""
        self.assertEqual(format_clock(None), "--:--")
        self.assertEqual(format_clock(7.25), "7:15")

    def test_elapsed_in_period_counts_down_from_eight_minutes(self) -> None:
        """Test remaining time converts to seconds elapsed."""
        self.assertEqual(elapsed_in_period(8, 0), 0)
        self.assertEqual(elapsed_in_period(6, 30), 90)
        self.assertEqual(elapsed_in_period(0, 0), 480)
        self.assertEqual(elapsed_in_period(8, 30), 0)

    def test_clock_at_elapsed_reverses_elapsed_seconds(self) -> None:
        """Test elapsed seconds render as the countdown clock at that moment."""
        self.assertEqual(clock_at_elapsed(0), "8:00")
        self.assertEqual(clock_at_elapsed(90), "6:30")
        self.assertEqual(clock_at_elapsed(480), "0:00")
        self.assertEqual(clock_at_elapsed(600), "0:00")
        self.assertEqual(clock_at_elapsed(elapsed_in_period(3, 17)), "3:17")

    def test_period_label(self) -> None:
        """Test known periods get a label and unknown ones a placeholder."""
        self.assertEqual(period_label(1), "Q1")
        self.assertEqual(period_label(4), "Q4")
        self.assertEqual(period_label(None), "Q-")
        self.assertEqual(period_label(7), "Q-")


if __name__ == "__main__":
    unittest.main()
