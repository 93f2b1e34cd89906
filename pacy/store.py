"""Where completed workouts and their raw samples come from."""

from datetime import datetime
from typing import Protocol

from pacy.db import activities as activities_db
from pacy.models import ActivityRecord, QuantityKind, Sample

TimeRange = tuple[datetime, datetime]


class ActivityStore(Protocol):
    def latest_activity(self) -> ActivityRecord | None: ...

    def has_samples(self, activity_id: str, kind: QuantityKind) -> bool: ...

    def fetch_samples(
        self,
        activity_id: str,
        kind: QuantityKind,
        time_range: TimeRange | None = None,
    ) -> list[Sample]: ...

    def save_activity(self, record: ActivityRecord) -> None: ...


class DatabaseActivityStore:
    """Workouts kept in the `workouts` and `workout_samples` tables."""

    def latest_activity(self) -> ActivityRecord | None:
        return activities_db.get_latest_activity()

    def has_samples(self, activity_id: str, kind: QuantityKind) -> bool:
        return activities_db.has_samples(activity_id, kind)

    def fetch_samples(
        self,
        activity_id: str,
        kind: QuantityKind,
        time_range: TimeRange | None = None,
    ) -> list[Sample]:
        start, end = time_range if time_range is not None else (None, None)
        return activities_db.get_samples(activity_id, kind, start=start, end=end)

    def save_activity(self, record: ActivityRecord) -> None:
        activities_db.insert_activity(record)


class InMemoryActivityStore:
    """Workouts held in memory, samples included on each record."""

    def __init__(self, records: list[ActivityRecord] | None = None):
        self.records: dict[str, ActivityRecord] = {r.id: r for r in records or []}

    def latest_activity(self) -> ActivityRecord | None:
        if not self.records:
            return None
        latest = max(self.records.values(), key=lambda r: r.end_time)
        return latest.model_copy(
            update={"distance_samples": [], "heart_rate_samples": []}
        )

    def has_samples(self, activity_id: str, kind: QuantityKind) -> bool:
        return bool(self.fetch_samples(activity_id, kind))

    def fetch_samples(
        self,
        activity_id: str,
        kind: QuantityKind,
        time_range: TimeRange | None = None,
    ) -> list[Sample]:
        record = self.records.get(activity_id)
        if record is None:
            return []
        match kind:
            case "distance":
                samples = record.distance_samples
            case "heart_rate":
                samples = record.heart_rate_samples
        if time_range is not None:
            start, end = time_range
            samples = [
                s for s in samples if s.start_time >= start and s.end_time <= end
            ]
        return sorted(samples, key=lambda s: s.start_time)

    def save_activity(self, record: ActivityRecord) -> None:
        self.records[record.id] = record
