"""
Utilities package for the Poolside Stat Tracker.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import (
    fmt_mmss, clamp_minutes, clamp_seconds, clock_value, split_clock,
    format_clock, elapsed_in_period, clock_at_elapsed, period_label
)
from .constants import (
    APP_TITLE, PERIOD_COUNT, PERIOD_LENGTH_MIN, PERIOD_LENGTH_SECONDS, PERIOD_LABELS,
    CLOCK_PRESETS_MIN, LINEUP_SIZE, LINEUP_SIZE_ERROR, GOALKEEPER_CAPS
)

__all__ = [
    "fmt_mmss", "clamp_minutes", "clamp_seconds", "clock_value", "split_clock",
    "format_clock", "elapsed_in_period", "clock_at_elapsed", "period_label",
    "APP_TITLE", "PERIOD_COUNT", "PERIOD_LENGTH_MIN", "PERIOD_LENGTH_SECONDS", "PERIOD_LABELS",
    "CLOCK_PRESETS_MIN", "LINEUP_SIZE", "LINEUP_SIZE_ERROR", "GOALKEEPER_CAPS"
]
