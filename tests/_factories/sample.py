from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from pacy.models import Sample

WORKOUT_START = datetime(2024, 5, 4, 7, 30, 0, tzinfo=timezone.utc)


class SampleFactory:
    """Builds back-to-back samples, with times given in seconds from a start time."""

    def __init__(self, start: datetime = WORKOUT_START):
        self.start = start

    def at(self, offset: float) -> datetime:
        return self.start + timedelta(seconds=offset)

    def make(self, start: float, end: float, value: float) -> Sample:
        return Sample(start_time=self.at(start), end_time=self.at(end), value=value)

    def distance_series(self, segments: Iterable[tuple[float, float]]) -> list[Sample]:
        """Contiguous distance samples from (meters, seconds) pairs."""
        samples = []
        offset = 0.0
        for meters, seconds in segments:
            samples.append(self.make(offset, offset + seconds, meters))
            offset += seconds
        return samples

    def heart_rate(self, offset: float, bpm: float) -> Sample:
        """An instantaneous heart rate reading."""
        return self.make(offset, offset, bpm)
