from .sample import Sample, QuantityKind
from .split import Split
from .activity import ActivityRecord, ActivityType, WorkoutSummary, WorkoutWithDetails
from .live import LiveMetrics, SessionState


__all__ = [
    "Sample",
    "QuantityKind",
    "Split",
    "ActivityRecord",
    "ActivityType",
    "WorkoutSummary",
    "WorkoutWithDetails",
    "LiveMetrics",
    "SessionState",
]
