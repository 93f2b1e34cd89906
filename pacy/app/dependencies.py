import logging
from functools import lru_cache

from fastapi import Depends, HTTPException

from pacy.integrations.strava import StravaClient, load_strava_token
from pacy.live import LiveWorkoutSession
from pacy.settings import DatabaseSettingsStore, SettingsStore, load_max_pulse
from pacy.store import ActivityStore, DatabaseActivityStore
from pacy.workouts import WorkoutHistory

logger = logging.getLogger(__name__)


def settings_store() -> SettingsStore:
    return DatabaseSettingsStore()


def activity_store() -> ActivityStore:
    return DatabaseActivityStore()


@lru_cache
def _workout_history() -> WorkoutHistory:
    return WorkoutHistory(store=DatabaseActivityStore())


def workout_history() -> WorkoutHistory:
    """The process-wide workout history, so split results are cached across requests."""
    return _workout_history()


@lru_cache
def _live_session() -> LiveWorkoutSession:
    return LiveWorkoutSession(max_pulse=load_max_pulse(DatabaseSettingsStore()))


def live_session() -> LiveWorkoutSession:
    """The single live session this process drives."""
    return _live_session()


def strava_client(settings: SettingsStore = Depends(settings_store)) -> StravaClient:
    token = load_strava_token(settings)
    if token is None:
        raise HTTPException(status_code=503, detail="Strava integration not configured")
    return StravaClient(token=token, settings=settings)
