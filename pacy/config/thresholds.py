"""Distances and durations the aggregation engine is built around."""

# Nominal length of one split.
SPLIT_DISTANCE_METERS = 1000.0

# The live "last 3 km" pace is computed over at most this much distance.
WINDOW_DISTANCE_METERS = 3000.0

# A final split shorter than this is left out of charts and averages.
TRAILING_SPLIT_THRESHOLD_METERS = 100.0

# Workouts shorter than this (10 minutes) are not shown as the latest workout.
MIN_QUALIFYING_DURATION_SECONDS = 600.0

# Used when no max heart rate has been saved yet.
DEFAULT_MAX_PULSE = 200

# No single distance sample or live reading can plausibly cover more than this.
MAX_SAMPLE_DISTANCE_METERS = 50_000.0
