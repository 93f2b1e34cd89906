"""The live workout session driven by a wearable's sensor callbacks.

The sensor provider pushes cumulative distance (with the session's elapsed time),
heart rate and relative altitude readings. The session turns those into deltas for
its `StreamingAggregator`, records the raw samples so the finished workout can be
split later, and tracks the session's lifecycle.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import logging
import math
import uuid

from pacy.agg.streaming import StreamingAggregator
from pacy.config.thresholds import DEFAULT_MAX_PULSE, MAX_SAMPLE_DISTANCE_METERS
from pacy.models import ActivityRecord, ActivityType, LiveMetrics, Sample, SessionState

logger = logging.getLogger(__name__)

MetricsListener = Callable[[LiveMetrics], None]


class SessionNotActiveError(Exception):
    """Raised when an operation needs a started session and there is none."""


class LiveWorkoutSession:
    def __init__(
        self,
        max_pulse: int = DEFAULT_MAX_PULSE,
        aggregator: StreamingAggregator | None = None,
    ):
        self.max_pulse = max_pulse
        self.aggregator = aggregator or StreamingAggregator()
        self._listeners: list[MetricsListener] = []
        self.state: SessionState = "idle"
        self.activity_type: ActivityType = "Run"
        self.started_at: datetime | None = None
        self._clear_recording()

    def _clear_recording(self) -> None:
        self._last_total_distance = 0.0
        self._distance_samples: list[Sample] = []
        self._heart_rate_samples: list[Sample] = []

    @property
    def running(self) -> bool:
        return self.state == "running"

    def add_listener(self, listener: MetricsListener) -> None:
        """Register a callback that receives fresh metrics after every change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        metrics = self.metrics()
        for listener in self._listeners:
            listener(metrics)

    def start(
        self, activity_type: ActivityType = "Run", start_time: datetime | None = None
    ) -> None:
        self.reset()
        self.activity_type = activity_type
        self.started_at = start_time or datetime.now(timezone.utc)
        self.state = "running"
        logger.info(
            f"Started {activity_type} session at {self.started_at.isoformat()}"
        )
        self._notify()

    def pause(self) -> None:
        if self.state != "running":
            raise SessionNotActiveError(f"Cannot pause a session that is {self.state}")
        self.state = "paused"
        self._notify()

    def resume(self) -> None:
        if self.state != "paused":
            raise SessionNotActiveError(f"Cannot resume a session that is {self.state}")
        self.state = "running"
        self._notify()

    def toggle_pause(self) -> None:
        if self.running:
            self.pause()
        else:
            self.resume()

    def _accepting_updates(self, kind: str) -> bool:
        if self.state in ("ended", "failed"):
            logger.debug(f"Dropping {kind} update for {self.state} session")
            return False
        return True

    def on_distance(self, total_distance: float, elapsed: float) -> None:
        """Handle a cumulative distance reading.

        Args:
            total_distance: Meters covered since the session started.
            elapsed: Seconds since the session started.

        Non-finite readings are dropped. A jump of more than
        `MAX_SAMPLE_DISTANCE_METERS` since the previous reading is taken as the
        new baseline instead of as distance covered.
        """
        if not self._accepting_updates("distance"):
            return
        if not (math.isfinite(total_distance) and math.isfinite(elapsed)):
            logger.warning(
                f"Dropping non-finite distance reading: "
                f"total_distance={total_distance}, elapsed={elapsed}"
            )
            return
        previous_elapsed = self.aggregator.total_elapsed
        distance_delta = total_distance - self._last_total_distance
        self._last_total_distance = total_distance
        if distance_delta > MAX_SAMPLE_DISTANCE_METERS:
            logger.warning(
                f"Ignoring implausible distance jump of {distance_delta:.0f} m; "
                f"using {total_distance:.0f} m as the new baseline"
            )
            distance_delta = 0.0
        self.aggregator.on_distance(distance_delta, elapsed)

        if self.started_at is not None and distance_delta > 0:
            start = self.started_at + timedelta(seconds=previous_elapsed)
            end = self.started_at + timedelta(seconds=max(elapsed, previous_elapsed))
            self._distance_samples.append(
                Sample(start_time=start, end_time=end, value=distance_delta)
            )
        self._notify()

    def on_heart_rate(self, value: float, at: datetime | None = None) -> None:
        """Handle a heart rate reading.

        Without `at`, the reading is timed on the session clock (start time plus
        the last reported elapsed time), the same clock distance samples use.
        """
        if not self._accepting_updates("heart rate"):
            return
        self.aggregator.on_heart_rate(value)
        if self.started_at is not None:
            if at is None:
                at = self.started_at + timedelta(
                    seconds=self.aggregator.total_elapsed
                )
            self._heart_rate_samples.append(
                Sample(start_time=at, end_time=at, value=value)
            )
        self._notify()

    def on_altitude(self, relative_altitude: float) -> None:
        if not self._accepting_updates("altitude"):
            return
        self.aggregator.on_altitude(relative_altitude)
        self._notify()

    def fail(self, reason: str) -> None:
        """Stop taking updates after a sensor or session failure."""
        logger.error(f"Workout session failed: {reason}")
        self.state = "failed"
        self._notify()

    def end(self, end_time: datetime | None = None) -> ActivityRecord:
        """Finish the session and return the recorded workout."""
        if self.started_at is None or self.state not in ("running", "paused"):
            raise SessionNotActiveError(f"Cannot end a session that is {self.state}")
        aggregator = self.aggregator
        record = ActivityRecord(
            id=str(uuid.uuid4()),
            activity_type=self.activity_type,
            start_time=self.started_at,
            end_time=end_time
            or self.started_at + timedelta(seconds=aggregator.total_elapsed),
            duration_seconds=aggregator.total_elapsed,
            total_distance_meters=aggregator.total_distance,
            elevation_gain_meters=aggregator.elevation_gain,
            distance_samples=list(self._distance_samples),
            heart_rate_samples=list(self._heart_rate_samples),
        )
        self.state = "ended"
        logger.info(
            f"Ended session {record.id}: {record.total_distance_meters:.0f} m "
            f"in {record.duration_seconds:.0f} s, "
            f"{record.elevation_gain_meters:.1f} m elevation gain"
        )
        self._notify()
        return record

    def reset(self) -> None:
        """Tear the session down so the next reading starts from zero.

        Readings that arrive after a reset (e.g. from a sensor that is still
        shutting down) start a fresh accumulation.
        """
        self.aggregator.reset()
        self._clear_recording()
        self.state = "idle"
        self.started_at = None

    def metrics(self) -> LiveMetrics:
        aggregator = self.aggregator
        return LiveMetrics(
            state=self.state,
            elapsed_seconds=aggregator.total_elapsed,
            distance_meters=aggregator.total_distance,
            overall_pace=aggregator.current_overall_pace(),
            window_pace=aggregator.current_window_pace(),
            heart_rate=aggregator.heart_rate,
            average_heart_rate=aggregator.average_heart_rate,
            heart_rate_percentage=aggregator.heart_rate_percentage(self.max_pulse),
            elevation_gain_meters=aggregator.elevation_gain,
        )
