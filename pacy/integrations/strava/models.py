from __future__ import annotations
from datetime import datetime, timezone
from typing import Literal, Self

from pydantic import BaseModel

from pacy.models import ActivityRecord, ActivityType


class StravaToken(BaseModel):
    """An OAuth token for the Strava API."""

    access_token: str
    refresh_token: str
    expires_at: int | None = None
    expires_in: int | None = None
    token_type: Literal["Bearer"] = "Bearer"

    def expires_at_datetime(self) -> datetime | None:
        if self.expires_at is None:
            return None
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)


class StravaActivityUpload(BaseModel):
    """The form fields for creating a manual activity on Strava."""

    name: str
    type: ActivityType
    start_date_local: str  # ISO-8601
    elapsed_time: int  # in seconds
    distance: float  # in meters
    description: str

    @classmethod
    def from_activity(cls, record: ActivityRecord) -> Self:
        whole_km = int(record.total_distance_meters) // 1000
        title = f"{whole_km} km {record.activity_type.lower()}"
        return cls(
            name=title,
            type=record.activity_type,
            start_date_local=record.start_time.isoformat(),
            elapsed_time=int(record.duration_seconds),
            distance=record.total_distance_meters,
            description=title,
        )
