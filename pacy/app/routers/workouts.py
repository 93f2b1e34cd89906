import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pacy.app.dependencies import settings_store, strava_client, workout_history
from pacy.integrations.strava import StravaClient
from pacy.models import Split, WorkoutWithDetails
from pacy.settings import SettingsStore, load_max_pulse
from pacy.workouts import WorkoutHistory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


class UploadResponse(BaseModel):
    uploaded: bool


def _latest_or_404(history: WorkoutHistory, max_pulse: int) -> WorkoutWithDetails:
    details = history.fetch_last_workout(max_pulse=max_pulse)
    if details is None:
        raise HTTPException(status_code=404, detail="No qualifying workout found")
    return details


@router.get("/latest", response_model=WorkoutWithDetails)
def read_latest_workout(
    history: WorkoutHistory = Depends(workout_history),
    settings: SettingsStore = Depends(settings_store),
) -> WorkoutWithDetails:
    """Get the most recent workout of at least 10 minutes with its splits and summary.

    A trailing split shorter than 100 m is left out.
    """
    return _latest_or_404(history, load_max_pulse(settings))


@router.get("/latest/splits", response_model=list[Split])
def read_latest_splits(
    history: WorkoutHistory = Depends(workout_history),
    settings: SettingsStore = Depends(settings_store),
) -> list[Split]:
    return _latest_or_404(history, load_max_pulse(settings)).splits


@router.post("/latest/strava", response_model=UploadResponse)
def upload_latest_workout(
    history: WorkoutHistory = Depends(workout_history),
    settings: SettingsStore = Depends(settings_store),
    client: StravaClient = Depends(strava_client),
) -> UploadResponse:
    """Log the most recent workout to Strava."""
    details = _latest_or_404(history, load_max_pulse(settings))
    uploaded = history.upload_to_strava(details.workout, client)
    if not uploaded:
        logger.warning(f"Upload of workout {details.workout.id} to Strava failed")
    return UploadResponse(uploaded=uploaded)
