"""Database operations for completed workouts and their raw samples."""

import logging
from datetime import datetime, timezone

from pacy.models import ActivityRecord, QuantityKind, Sample
from .connection import get_db_cursor

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _row_to_activity(row: tuple) -> ActivityRecord:
    return ActivityRecord(
        id=str(row[0]),
        activity_type=row[1],
        start_time=_aware(row[2]),
        end_time=_aware(row[3]),
        duration_seconds=row[4],
        total_distance_meters=row[5],
        elevation_gain_meters=row[6],
    )


def get_latest_activity() -> ActivityRecord | None:
    """Get the workout that ended most recently, without its samples."""
    with get_db_cursor() as cursor:
        cursor.execute(
            """
            SELECT id, activity_type, start_time, end_time, duration_seconds,
                   total_distance_meters, elevation_gain_meters
            FROM workouts
            ORDER BY end_time DESC
            LIMIT 1
            """
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return _row_to_activity(row)


def has_samples(activity_id: str, kind: QuantityKind) -> bool:
    """Check whether a workout has at least one sample of the given kind."""
    with get_db_cursor() as cursor:
        cursor.execute(
            "SELECT 1 FROM workout_samples WHERE workout_id = %s AND kind = %s LIMIT 1",
            (activity_id, kind),
        )
        return cursor.fetchone() is not None


def get_samples(
    activity_id: str,
    kind: QuantityKind,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[Sample]:
    """Get a workout's samples of one kind, ordered by start time.

    Args:
        activity_id: The workout to read samples for.
        kind: "distance" or "heart_rate".
        start: If given, only samples starting at or after this time.
        end: If given, only samples ending at or before this time.
    """
    query = """
        SELECT start_time, end_time, value
        FROM workout_samples
        WHERE workout_id = %s AND kind = %s
    """
    params: list = [activity_id, kind]
    if start is not None:
        query += " AND start_time >= %s"
        params.append(start)
    if end is not None:
        query += " AND end_time <= %s"
        params.append(end)
    query += " ORDER BY start_time ASC"

    with get_db_cursor() as cursor:
        cursor.execute(query, tuple(params))
        rows = cursor.fetchall()

    logger.debug(f"Fetched {len(rows)} {kind} samples for workout {activity_id}")
    return [
        Sample(start_time=_aware(row[0]), end_time=_aware(row[1]), value=row[2])
        for row in rows
    ]


def insert_activity(record: ActivityRecord) -> None:
    """Insert a workout along with its distance and heart rate samples."""
    sample_rows = [
        (record.id, "distance", s.start_time, s.end_time, s.value)
        for s in record.distance_samples
    ] + [
        (record.id, "heart_rate", s.start_time, s.end_time, s.value)
        for s in record.heart_rate_samples
    ]

    with get_db_cursor() as cursor:
        cursor.execute(
            """
            INSERT INTO workouts (
                id, activity_type, start_time, end_time, duration_seconds,
                total_distance_meters, elevation_gain_meters
            ) VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            (
                record.id,
                record.activity_type,
                record.start_time,
                record.end_time,
                record.duration_seconds,
                record.total_distance_meters,
                record.elevation_gain_meters,
            ),
        )
        if sample_rows:
            cursor.executemany(
                """
                INSERT INTO workout_samples (workout_id, kind, start_time, end_time, value)
                VALUES (%s, %s, %s, %s, %s)
                """,
                sample_rows,
            )

    logger.info(
        f"Inserted workout {record.id} with {len(sample_rows)} samples "
        f"({len(record.distance_samples)} distance, "
        f"{len(record.heart_rate_samples)} heart rate)"
    )
