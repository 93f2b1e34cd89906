"""Endpoints the wearable's sensor provider pushes readings to.

All routes are `async` and never await while touching the session, so every
update runs on the event loop thread, one at a time.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from pacy.app.dependencies import activity_store, live_session
from pacy.live import LiveWorkoutSession, SessionNotActiveError
from pacy.models import ActivityRecord, ActivityType, LiveMetrics
from pacy.store import ActivityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


class StartSessionRequest(BaseModel):
    activity_type: ActivityType = "Run"
    start_time: datetime | None = None


class DistanceReading(BaseModel):
    total_distance: float = Field(
        ge=0,
        allow_inf_nan=False,
        description="Meters covered since the session started",
    )
    elapsed: float = Field(
        ge=0, allow_inf_nan=False, description="Seconds since the session started"
    )


class HeartRateReading(BaseModel):
    value: float = Field(ge=0, allow_inf_nan=False, description="Beats per minute")
    at: datetime | None = None


class AltitudeReading(BaseModel):
    relative_altitude: float = Field(
        allow_inf_nan=False,
        description="Meters relative to an arbitrary baseline",
    )


class EndSessionRequest(BaseModel):
    end_time: datetime | None = None


class SessionFailure(BaseModel):
    reason: str


@router.post("/start", response_model=LiveMetrics)
async def start_session(
    body: StartSessionRequest,
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    session.start(activity_type=body.activity_type, start_time=body.start_time)
    return session.metrics()


@router.post("/distance", response_model=LiveMetrics)
async def record_distance(
    reading: DistanceReading,
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    session.on_distance(reading.total_distance, reading.elapsed)
    return session.metrics()


@router.post("/heart-rate", response_model=LiveMetrics)
async def record_heart_rate(
    reading: HeartRateReading,
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    session.on_heart_rate(reading.value, at=reading.at)
    return session.metrics()


@router.post("/altitude", response_model=LiveMetrics)
async def record_altitude(
    reading: AltitudeReading,
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    session.on_altitude(reading.relative_altitude)
    return session.metrics()


@router.post("/pause", response_model=LiveMetrics)
async def pause_session(
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    try:
        session.pause()
    except SessionNotActiveError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.metrics()


@router.post("/resume", response_model=LiveMetrics)
async def resume_session(
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    try:
        session.resume()
    except SessionNotActiveError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.metrics()


@router.post("/fail", response_model=LiveMetrics)
async def fail_session(
    failure: SessionFailure,
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    session.fail(failure.reason)
    return session.metrics()


@router.post("/end", response_model=ActivityRecord)
async def end_session(
    body: EndSessionRequest,
    session: LiveWorkoutSession = Depends(live_session),
    store: ActivityStore = Depends(activity_store),
) -> ActivityRecord:
    """Finish the session and save the workout to the record store."""
    try:
        record = session.end(end_time=body.end_time)
    except SessionNotActiveError as e:
        raise HTTPException(status_code=409, detail=str(e))
    # The session is already finished; saving can block without racing updates.
    await run_in_threadpool(store.save_activity, record)
    return record


@router.post("/reset", response_model=LiveMetrics)
async def reset_session(
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    session.reset()
    return session.metrics()


@router.get("/metrics", response_model=LiveMetrics)
async def read_metrics(
    session: LiveWorkoutSession = Depends(live_session),
) -> LiveMetrics:
    return session.metrics()
