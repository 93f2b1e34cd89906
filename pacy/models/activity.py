from __future__ import annotations
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .sample import Sample
from .split import Split

ActivityType = Literal["Run", "Walk", "Hike", "Ride"]


class ActivityRecord(BaseModel):
    """A completed workout as kept by the record store.

    The sample lists are only populated when the record is built in memory (for
    example when a live session ends); stores that serve samples through
    separate queries leave them empty.
    """

    id: str
    activity_type: ActivityType = "Run"
    start_time: datetime
    end_time: datetime
    duration_seconds: float
    total_distance_meters: float = 0.0
    elevation_gain_meters: float = 0.0
    distance_samples: list[Sample] = Field(default_factory=list)
    heart_rate_samples: list[Sample] = Field(default_factory=list)


class WorkoutSummary(BaseModel):
    """Whole-workout statistics, recomputed whenever they are requested."""

    average_pace_seconds_per_km: float | None = None
    average_pace: str
    average_heart_rate: float | None = None
    heart_rate_percentage: float | None = None
    elevation_gain_meters: float = 0.0


class WorkoutWithDetails(BaseModel):
    """A workout together with its splits and summary."""

    workout: ActivityRecord
    splits: list[Split]
    summary: WorkoutSummary
