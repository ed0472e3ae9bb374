"""
Unit tests for mapping diagram taps to pool and goal coordinates.
"""
import unittest

from poolside.services.coordinates import normalize_goal_tap, normalize_pool_tap


class TestCoordinates(unittest.TestCase):
    """Test cases for pool and goal tap normalization."""

    def test_pool_tap_maps_to_meters(self) -> None:
        """Test fractional pool taps scale to a 25 x 20 meter pool."""
        self.assertEqual(normalize_pool_tap(0.5, 0.5), (12.5, 10.0))
        self.assertEqual(normalize_pool_tap(0.0, 0.0), (0.0, 0.0))
        self.assertEqual(normalize_pool_tap(1.0, 1.0), (25.0, 20.0))

    def test_pool_tap_is_clamped(self) -> None:
        """Test taps outside the diagram clamp to its edges."""
        self.assertEqual(normalize_pool_tap(1.4, -0.2), (25.0, 0.0))

    def test_goal_tap_flips_vertical_axis(self) -> None:
        """Test goal y is measured up from the water line."""
        x, y = normalize_goal_tap(0.5, 0.0)
        self.assertAlmostEqual(x, 1.5)
        self.assertAlmostEqual(y, 0.9)
        x, y = normalize_goal_tap(0.0, 1.0)
        self.assertAlmostEqual(x, 0.0)
        self.assertAlmostEqual(y, 0.0)

    def test_goal_tap_rounds_to_two_decimals(self) -> None:
        """Test goal coordinates keep two decimals."""
        x, y = normalize_goal_tap(0.123, 0.5)
        self.assertAlmostEqual(x, 0.37)
        self.assertAlmostEqual(y, 0.45)


if __name__ == "__main__":
    unittest.main()
