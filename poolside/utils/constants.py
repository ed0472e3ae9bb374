"""
Constants for the Poolside Stat Tracker application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Poolside Stat Tracker"

# Game timing
PERIOD_COUNT = 4
PERIOD_LENGTH_MIN = 8
PERIOD_LENGTH_SECONDS = PERIOD_LENGTH_MIN * 60
MAX_CLOCK_SECONDS = 59

# Quick-set buttons for the countdown clock (minutes remaining)
CLOCK_PRESETS_MIN = [8, 6, 4, 2, 0]

# Period labels shown in the event and substitution logs
PERIOD_LABELS = {
    1: "Q1",
    2: "Q2",
    3: "Q3",
    4: "Q4",
}

# Lineup configuration
LINEUP_SIZE = 7
LINEUP_SIZE_ERROR = f"Starting lineup must have exactly {LINEUP_SIZE} players"

# Cap numbers conventionally worn by goalkeepers (policy, not enforced)
GOALKEEPER_CAPS = frozenset({1, 13, 15})

# Roster cap numbers
MIN_CAP_NUMBER = 1
MAX_CAP_NUMBER = 99
ROSTER_CAP_CHOICES = list(range(1, 15))

# Diagram geometry (meters)
POOL_LENGTH_M = 25.0
POOL_WIDTH_M = 20.0
GOAL_WIDTH_M = 3.0
GOAL_HEIGHT_M = 0.9
