"""
Coordinate normalization for the pool and goal diagrams.

A tap on a diagram arrives as a position relative to the diagram's bounding
box. These helpers turn it into domain coordinates: pool meters (0-25 x 0-20,
one decimal) or goal-face units (0-3 wide x 0-0.9 high, two decimals, with y
measured up from the water line).
"""
from typing import Tuple

from ..utils.constants import GOAL_HEIGHT_M, GOAL_WIDTH_M, POOL_LENGTH_M, POOL_WIDTH_M


def normalize_pool_tap(fx: float, fy: float) -> Tuple[float, float]:
    """
    Map a fractional tap on the pool diagram to pool meters.

    Example:
        >>> normalize_pool_tap(0.5, 0.5)
        (12.5, 10.0)
    """
    fx = max(0.0, min(1.0, fx))
    fy = max(0.0, min(1.0, fy))
    return round(fx * POOL_LENGTH_M, 1), round(fy * POOL_WIDTH_M, 1)


def normalize_goal_tap(fx: float, fy: float) -> Tuple[float, float]:
    """
    Map a fractional tap on the goal diagram to goal-face units.

    The diagram's top edge is the crossbar, so y is flipped.

    Example:
        >>> normalize_goal_tap(0.5, 0.0)
        (1.5, 0.9)
    """
    fx = max(0.0, min(1.0, fx))
    fy = max(0.0, min(1.0, fy))
    return round(fx * GOAL_WIDTH_M, 2), round(GOAL_HEIGHT_M - fy * GOAL_HEIGHT_M, 2)
