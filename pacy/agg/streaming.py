from collections import deque
from typing import NamedTuple
import logging

from pacy.config.thresholds import WINDOW_DISTANCE_METERS
from pacy.utils.pace import pace_string

logger = logging.getLogger(__name__)


class DistanceDurationIncrement(NamedTuple):
    distance: float  # in meters
    duration: float  # in seconds


class StreamingAggregator:
    """
    Live workout figures computed from an open-ended stream of sensor readings.

    Keeps cumulative totals plus a sliding window over roughly the last 3 km, so the
    "last 3 km" pace costs amortized O(1) per update no matter how long the session
    runs. Heart rate is averaged over every sample seen (not time-weighted), and
    elevation gain only counts upward altitude changes.

    Instances hold sequential running state and are not thread-safe; callers must
    deliver all updates from a single thread or event loop.
    """

    def __init__(self, window_distance_limit: float = WINDOW_DISTANCE_METERS):
        self.window_distance_limit = window_distance_limit
        self.reset()

    def reset(self) -> None:
        """Clear all totals and the window."""
        self.total_distance = 0.0
        self.total_duration = 0.0
        self.total_elapsed = 0.0
        self.window_distance = 0.0
        self.window_duration = 0.0
        self.window: deque[DistanceDurationIncrement] = deque()

        self.heart_rate = 0.0
        self._heart_rate_sum = 0.0
        self._heart_rate_count = 0

        self.elevation_gain = 0.0
        self._last_altitude: float | None = None

    def on_distance(self, distance_delta: float, elapsed: float) -> None:
        """Record distance covered since the last reading.

        Args:
            distance_delta: Meters covered since the previous distance reading.
            elapsed: Seconds since the session started, as reported by the sensor.
        """
        duration_delta = elapsed - self.total_elapsed
        self.total_elapsed = elapsed
        self.on_distance_update(distance_delta, duration_delta)

    def on_distance_update(self, distance_delta: float, duration_delta: float) -> None:
        """Add a distance/duration increment and slide the window forward."""
        if distance_delta < 0 or duration_delta < 0:
            logger.warning(
                f"Ignoring negative part of distance update: "
                f"distance_delta={distance_delta}, duration_delta={duration_delta}"
            )
            distance_delta = max(0.0, distance_delta)
            duration_delta = max(0.0, duration_delta)

        self.total_distance += distance_delta
        self.total_duration += duration_delta

        self.window.append(DistanceDurationIncrement(distance_delta, duration_delta))
        self.window_distance += distance_delta
        self.window_duration += duration_delta

        # evict the oldest increments until the window is back within the limit
        while self.window and self.window_distance > self.window_distance_limit:
            oldest = self.window.popleft()
            self.window_distance -= oldest.distance
            self.window_duration -= oldest.duration
        if not self.window:
            # Don't let floating point leftovers outlive the increments.
            self.window_distance = 0.0
            self.window_duration = 0.0

    def on_heart_rate(self, value: float) -> None:
        self.heart_rate = value
        self._heart_rate_sum += value
        self._heart_rate_count += 1

    def on_altitude(self, relative_altitude: float) -> None:
        """Accumulate elevation gain from a relative altitude reading.

        The first reading after a reset only sets the baseline.
        """
        if self._last_altitude is not None:
            climb = relative_altitude - self._last_altitude
            if climb > 0:
                self.elevation_gain += climb
        self._last_altitude = relative_altitude

    @property
    def average_heart_rate(self) -> float:
        if self._heart_rate_count == 0:
            return 0.0
        return self._heart_rate_sum / self._heart_rate_count

    def heart_rate_percentage(self, max_pulse: int) -> float:
        """Average heart rate as a percentage of `max_pulse`."""
        if max_pulse <= 0:
            return 0.0
        return self.average_heart_rate / max_pulse * 100

    def current_overall_pace(self) -> str:
        return pace_string(self.total_distance, self.total_duration)

    def current_window_pace(self) -> str:
        """Pace over the last ~3 km."""
        return pace_string(self.window_distance, self.window_duration)
