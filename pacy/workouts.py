"""The workout history: the latest workout, its splits and its summary."""

import logging

from pacy.agg.splits import SplitCache, build_splits
from pacy.agg.summary import (
    distance_weighted_average_heart_rate,
    drop_trailing_split,
    summarize_workout,
)
from pacy.config.thresholds import MIN_QUALIFYING_DURATION_SECONDS
from pacy.integrations.strava.client import StravaClient
from pacy.integrations.strava.models import StravaActivityUpload
from pacy.models import ActivityRecord, Split, WorkoutWithDetails
from pacy.store import ActivityStore
from pacy.utils.pace import format_pace, pace_seconds_per_km

logger = logging.getLogger(__name__)


class WorkoutHistory:
    """Reads completed workouts from a store and derives their splits.

    Splits are computed once per workout and cached for the lifetime of the
    instance.
    """

    def __init__(self, store: ActivityStore, cache: SplitCache | None = None):
        self.store = store
        self.cache = cache or SplitCache()

    def qualifies(self, record: ActivityRecord) -> bool:
        """Whether a workout lasted 10+ minutes and has distance data."""
        if record.duration_seconds < MIN_QUALIFYING_DURATION_SECONDS:
            return False
        return self.store.has_samples(record.id, "distance")

    def fetch_last_workout(
        self, max_pulse: int | None = None
    ) -> WorkoutWithDetails | None:
        """Get the most recent workout with its (trimmed) splits and summary.

        Returns None when there is no workout or the latest one does not qualify.
        """
        record = self.store.latest_activity()
        if record is None:
            logger.info("No workouts found")
            return None
        if not self.qualifies(record):
            logger.info(
                f"Latest workout {record.id} does not qualify "
                f"(duration {record.duration_seconds:.0f} s)"
            )
            return None

        splits = self.fetch_workout_details(record)
        logger.info(f"Processed and fetched details for workout {record.id}")
        return WorkoutWithDetails(
            workout=record,
            splits=drop_trailing_split(splits),
            summary=summarize_workout(record, splits, max_pulse=max_pulse),
        )

    def fetch_workout_details(self, record: ActivityRecord) -> list[Split]:
        """Get the splits for a workout, computing them on first request."""
        return self.cache.get_or_compute(record.id, lambda: self._build_splits(record))

    def _build_splits(self, record: ActivityRecord) -> list[Split]:
        time_range = (record.start_time, record.end_time)
        heart_rate_samples = self.store.fetch_samples(
            record.id, "heart_rate", time_range
        )
        logger.info(f"Fetched {len(heart_rate_samples)} heart rate samples")
        distance_samples = self.store.fetch_samples(record.id, "distance", time_range)
        logger.info(f"Fetched {len(distance_samples)} distance samples")
        return build_splits(distance_samples, heart_rate_samples)

    def average_pace(self, record: ActivityRecord) -> str | None:
        """The workout's overall pace, or None if it covered no distance."""
        pace = pace_seconds_per_km(
            record.total_distance_meters, record.duration_seconds
        )
        if pace is None:
            return None
        return format_pace(pace)

    def average_heart_rate(self, record: ActivityRecord) -> float | None:
        """Distance-weighted heart rate from already computed splits, if any."""
        splits = self.cache.get(record.id)
        if not splits:
            return None
        return distance_weighted_average_heart_rate(splits)

    def upload_to_strava(self, record: ActivityRecord, client: StravaClient) -> bool:
        return client.upload_activity(StravaActivityUpload.from_activity(record))
