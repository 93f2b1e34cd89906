from .sample import SampleFactory, WORKOUT_START
from .activity import ActivityRecordFactory

__all__ = [
    "SampleFactory",
    "ActivityRecordFactory",
    "WORKOUT_START",
]
