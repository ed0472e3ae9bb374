"""
Clock helpers for the Poolside Stat Tracker application.

The game clock is a countdown: the value shown is the time remaining in an
8-minute period. Stat events store it as fractional minutes
(``minutes + seconds / 60``); substitutions store whole seconds elapsed in
the period.
"""
import math
from typing import Optional, Tuple

from .constants import MAX_CLOCK_SECONDS, PERIOD_LABELS, PERIOD_LENGTH_MIN, PERIOD_LENGTH_SECONDS


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as M:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in M:SS format

    Example:
        >>> fmt_mmss(90)
        '1:30'
        >>> fmt_mmss(5)
        '0:05'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m}:{s:02d}"


def clamp_minutes(minutes: int) -> int:
    """Clamp a minutes input to the period length (0-8)."""
    return max(0, min(PERIOD_LENGTH_MIN, int(minutes)))


def clamp_seconds(seconds: int) -> int:
    """Clamp a seconds input to 0-59."""
    return max(0, min(MAX_CLOCK_SECONDS, int(seconds)))


def clock_value(minutes: int, seconds: int) -> float:
    """Combine clock inputs into the fractional-minute value sent to the API."""
    return minutes + seconds / 60


def split_clock(clock: float) -> Tuple[int, int]:
    """
    Split a fractional-minute clock into whole minutes and seconds.

    The remainder is rounded to the nearest second; a remainder that rounds
    up to 60 carries into the minute.

    Example:
        >>> split_clock(5.5)
        (5, 30)
        >>> split_clock(2.9999)
        (3, 0)
    """
    minutes = math.floor(clock)
    seconds = round((clock - minutes) * 60)
    if seconds >= 60:
        minutes += 1
        seconds -= 60
    return minutes, seconds


def format_clock(clock: Optional[float]) -> str:
    """Format a stored fractional-minute clock for the event log."""
    if clock is None:
        return "--:--"
    minutes, seconds = split_clock(clock)
    return f"{minutes}:{seconds:02d}"


def elapsed_in_period(minutes: int, seconds: int) -> int:
    """Convert the remaining-time clock into whole seconds elapsed in the period."""
    remaining = minutes * 60 + seconds
    return max(0, PERIOD_LENGTH_SECONDS - remaining)


def clock_at_elapsed(seconds: int) -> str:
    """
    Format seconds elapsed in a period as the countdown clock showing then.

    Example:
        >>> clock_at_elapsed(90)
        '6:30'
    """
    return fmt_mmss(PERIOD_LENGTH_SECONDS - max(0, min(PERIOD_LENGTH_SECONDS, int(seconds))))


def period_label(period: Optional[int]) -> str:
    """Short label for a period; unknown periods show as ``Q-``."""
    return PERIOD_LABELS.get(period, "Q-")
