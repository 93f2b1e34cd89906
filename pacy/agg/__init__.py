from .streaming import StreamingAggregator, DistanceDurationIncrement
from .splits import build_splits, SplitCache
from .summary import (
    overall_average_pace,
    distance_weighted_average_heart_rate,
    drop_trailing_split,
    summarize_workout,
)

__all__ = [
    "StreamingAggregator",
    "DistanceDurationIncrement",
    "build_splits",
    "SplitCache",
    "overall_average_pace",
    "distance_weighted_average_heart_rate",
    "drop_trailing_split",
    "summarize_workout",
]
