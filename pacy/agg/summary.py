from collections.abc import Sequence

from pacy.config.thresholds import TRAILING_SPLIT_THRESHOLD_METERS
from pacy.models import ActivityRecord, Split, WorkoutSummary
from pacy.utils.pace import pace_seconds_per_km, pace_string


def overall_average_pace(total_distance: float, total_duration: float) -> str:
    """
    Calculate the average pace for a whole workout, formatted as ``M'SS''``.

    Returns ``0'00''`` when no distance was covered.
    """
    return pace_string(total_distance, total_duration)


def distance_weighted_average_heart_rate(splits: Sequence[Split]) -> float | None:
    """
    Calculate the average heart rate across splits, weighting each by its distance.

    Returns None (rather than 0) when there are no splits or they cover no distance,
    so that callers can tell a missing value from a real reading.
    """
    total_distance = sum(split.distance for split in splits)
    if total_distance <= 0:
        return None
    weighted = sum(split.average_heart_rate * split.distance for split in splits)
    return weighted / total_distance


def drop_trailing_split(
    splits: Sequence[Split], threshold: float = TRAILING_SPLIT_THRESHOLD_METERS
) -> list[Split]:
    """Remove a final split shorter than `threshold` meters.

    A few dozen meters at the end of a run produce a wildly noisy pace and would
    otherwise dominate a chart's axis.
    """
    if splits and splits[-1].distance < threshold:
        return list(splits[:-1])
    return list(splits)


def summarize_workout(
    record: ActivityRecord, splits: Sequence[Split], max_pulse: int | None = None
) -> WorkoutSummary:
    """
    Build the summary shown for a finished workout.

    Pace comes from the workout's own totals. Heart rate is the distance-weighted
    average over the splits after the short trailing split has been dropped.

    Args:
        record: The completed workout.
        splits: Its splits, as produced by `build_splits`.
        max_pulse: If given, the heart rate is also expressed as a percentage of it.
    """
    average_heart_rate = distance_weighted_average_heart_rate(
        drop_trailing_split(splits)
    )
    heart_rate_percentage = None
    if average_heart_rate is not None and max_pulse:
        heart_rate_percentage = average_heart_rate / max_pulse * 100
    return WorkoutSummary(
        average_pace_seconds_per_km=pace_seconds_per_km(
            record.total_distance_meters, record.duration_seconds
        ),
        average_pace=overall_average_pace(
            record.total_distance_meters, record.duration_seconds
        ),
        average_heart_rate=average_heart_rate,
        heart_rate_percentage=heart_rate_percentage,
        elevation_gain_meters=record.elevation_gain_meters,
    )
