import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from pacy.app.dependencies import live_session, settings_store
from pacy.live import LiveWorkoutSession
from pacy.settings import SettingsStore, load_max_pulse, save_max_pulse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


class MaxPulse(BaseModel):
    max_pulse: int


@router.get("/max-pulse", response_model=MaxPulse)
def read_max_pulse(settings: SettingsStore = Depends(settings_store)) -> MaxPulse:
    return MaxPulse(max_pulse=load_max_pulse(settings))


@router.put("/max-pulse", response_model=MaxPulse)
async def update_max_pulse(
    body: MaxPulse,
    settings: SettingsStore = Depends(settings_store),
    session: LiveWorkoutSession = Depends(live_session),
) -> MaxPulse:
    try:
        await run_in_threadpool(save_max_pulse, settings, body.max_pulse)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    # Applied on the event loop, like every other change to the live session.
    session.max_pulse = body.max_pulse
    return MaxPulse(max_pulse=body.max_pulse)
