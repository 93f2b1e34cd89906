from typing import Literal

from pydantic import BaseModel, computed_field

SessionState = Literal["idle", "running", "paused", "ended", "failed"]


class LiveMetrics(BaseModel):
    """A snapshot of an in-progress workout, meant to be polled by a display."""

    state: SessionState
    elapsed_seconds: float
    distance_meters: float
    overall_pace: str
    window_pace: str
    heart_rate: float
    average_heart_rate: float
    heart_rate_percentage: float
    elevation_gain_meters: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000
