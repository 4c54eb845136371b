"""Application constants."""

# Rep range used when a template exercise does not set one
DEFAULT_MIN_REPS = 8
DEFAULT_MAX_REPS = 12

# Per-equipment weight increments (user-overridable in settings)
DEFAULT_WEIGHT_INCREMENT = 2.5
DEFAULT_KETTLEBELL_INCREMENT = 4.0

# 1RM estimation: Brzycki is unreliable above this many reps
BRZYCKI_MAX_RELIABLE_REPS = 30

# Trend analysis
TREND_MIN_SESSIONS = 3
TREND_WINDOW_SESSIONS = 4
TREND_IMPROVING_RATIO = 0.7

# RPE trend: average over the last N sets that carry an RPE
RPE_WINDOW = 3
RPE_EASY_MAX = 7.0
RPE_MODERATE_MAX = 8.5

# Progress suggestions
SUGGEST_WEIGHT_AFTER_WEEKS = 2  # weeks without progress before a small weight bump
SUGGEST_REPS_AFTER_WEEKS = 1
SUGGEST_SETS_AFTER_WEEKS = 3
SUGGEST_SETS_MAX = 5  # no extra-set suggestion at or above this many working sets
DELOAD_FACTOR = 0.85
