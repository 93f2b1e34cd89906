from bisect import bisect_left, bisect_right
from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import threading

from pacy.config.thresholds import MAX_SAMPLE_DISTANCE_METERS, SPLIT_DISTANCE_METERS
from pacy.models import Sample, Split

logger = logging.getLogger(__name__)


@dataclass
class _SplitAccumulator:
    distance: float = 0.0
    duration: float = 0.0
    heart_rate_sum: float = 0.0
    heart_rate_count: int = 0

    def average_heart_rate(self) -> float:
        if self.heart_rate_count == 0:
            return 0.0
        return self.heart_rate_sum / self.heart_rate_count


class _HeartRateIndex:
    """Heart rate samples sorted by start time, for containment lookups.

    Each heart rate sample is handed out once, to the first distance sample that
    contains it, so a reading on the boundary of two back-to-back distance
    samples isn't counted twice.
    """

    def __init__(self, samples: Sequence[Sample]):
        self.samples = sorted(samples, key=lambda s: s.start_time)
        self._starts = [s.start_time for s in self.samples]
        self._taken: set[int] = set()

    def take_contained(self, sample: Sample) -> list[Sample]:
        """Heart rate samples within `sample`'s interval not taken yet."""
        lo = bisect_left(self._starts, sample.start_time)
        hi = bisect_right(self._starts, sample.end_time)
        contained = []
        for i in range(lo, hi):
            if i not in self._taken and sample.contains(self.samples[i]):
                self._taken.add(i)
                contained.append(self.samples[i])
        return contained


def build_splits(
    distance_samples: Sequence[Sample],
    heart_rate_samples: Sequence[Sample],
    split_distance: float = SPLIT_DISTANCE_METERS,
) -> list[Split]:
    """
    Cut a completed workout into fixed-distance splits.

    Distance samples are walked in start-time order and accumulated until the
    running distance reaches `split_distance`. The overshoot is carried into the
    next split, with its duration interpolated from the accumulated split's
    average pace (distance and duration before truncation). Each split's heart
    rate is the mean of the heart rate samples that fall entirely inside one of the
    split's distance samples; heart rate is not carried across a boundary, and a
    split with no such samples reports 0.

    Whatever distance remains at the end becomes a final, shorter split.

    Note that containment matching can skip heart rate samples that straddle two
    distance samples when heart rate is recorded sparsely.

    A distance sample longer than `MAX_SAMPLE_DISTANCE_METERS` is a sensor glitch
    and is skipped.
    """
    hr_index = _HeartRateIndex(heart_rate_samples)
    ordered = sorted(distance_samples, key=lambda s: s.start_time)

    splits: list[Split] = []
    current = _SplitAccumulator()

    def emit(distance: float, duration: float, heart_rate: float) -> None:
        split = Split(
            index=len(splits) + 1,
            distance=distance,
            duration=duration,
            average_heart_rate=heart_rate,
        )
        logger.debug(f"Added split: {split}")
        splits.append(split)

    for sample in ordered:
        if sample.value > MAX_SAMPLE_DISTANCE_METERS:
            logger.warning(
                f"Skipping implausible distance sample of {sample.value:.0f} m "
                f"starting {sample.start_time.isoformat()}"
            )
            continue
        current.distance += max(0.0, sample.value)
        current.duration += sample.duration_seconds

        contained = hr_index.take_contained(sample)
        current.heart_rate_sum += sum(hr.value for hr in contained)
        current.heart_rate_count += len(contained)

        while current.distance >= split_distance:
            extra_distance = current.distance - split_distance
            extra_duration = extra_distance * (current.duration / current.distance)
            emit(
                split_distance,
                current.duration - extra_duration,
                current.average_heart_rate(),
            )
            current = _SplitAccumulator(
                distance=extra_distance, duration=extra_duration
            )

    if current.distance > 0:
        emit(current.distance, current.duration, current.average_heart_rate())

    logger.info(
        f"Built {len(splits)} splits from {len(ordered)} distance samples "
        f"and {len(hr_index.samples)} heart rate samples"
    )
    return splits


class SplitCache:
    """Splits by activity id, computed at most once per id.

    Safe to share between threads: the first stored result for an id wins and is
    what every caller gets back.
    """

    def __init__(self):
        self._splits: dict[str, list[Split]] = {}
        self._lock = threading.Lock()

    def get(self, activity_id: str) -> list[Split] | None:
        with self._lock:
            return self._splits.get(activity_id)

    def get_or_compute(
        self, activity_id: str, compute: Callable[[], list[Split]]
    ) -> list[Split]:
        """Return the cached splits for `activity_id`, computing them if missing.

        The computation runs outside the lock, so two threads racing on a new id
        may both compute; only the first result is kept.
        """
        cached = self.get(activity_id)
        if cached is not None:
            return cached
        splits = compute()
        with self._lock:
            return self._splits.setdefault(activity_id, splits)

    def __contains__(self, activity_id: str) -> bool:
        with self._lock:
            return activity_id in self._splits
