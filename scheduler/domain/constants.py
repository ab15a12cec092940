"""Numeric defaults for the scheduling algorithm. Durations are in seconds."""

MINUTE = 60.0
DAY = 24 * 3600.0

# ---- Default scheduling parameters ----

EASY_GRADUATING_INTERVAL = 4 * DAY
GOOD_GRADUATING_INTERVAL = 1 * DAY
EASY_BOOST = 1.3

# First learning interval when learning_intervals is empty
FALLBACK_LEARNING_INTERVAL = 1 * MINUTE

# ---- Spacing factor ----

DEFAULT_SPACING_FACTOR = 2.5
MIN_SPACING_FACTOR = 1.3

LAPSE_FACTOR_PENALTY = 0.2   # review -> again
HARD_FACTOR_PENALTY = 0.15   # review -> hard
EASY_FACTOR_BONUS = 0.15     # review -> easy

HARD_INTERVAL_MULTIPLIER = 1.2
