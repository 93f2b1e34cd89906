# This file loads env variables and must thus be imported before anything else.
from . import env_loader  # noqa: F401
from .env_loader import get_current_environment, validate_required_env_vars

import logging
import os

from fastapi import FastAPI

from .models import EnvironmentResponse
from .routers import (
    session_router,
    workouts_router,
    oauth_router,
    settings_router,
)

validate_required_env_vars()

logger = logging.getLogger(__name__)

# Routes the wearable pushes live sensor readings to, routes for reading the latest
# workout with its splits and uploading it to Strava, the Strava OAuth flow, and the
# max heart rate setting.
app = FastAPI()
app.include_router(session_router)
app.include_router(workouts_router)
app.include_router(oauth_router)
app.include_router(settings_router)


# Configure basic logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Configure the logging for the app itself if the user specifies it.
if "LOG_LEVEL" in os.environ:
    match os.environ["LOG_LEVEL"].upper():
        case "DEBUG":
            log_level = logging.DEBUG
        case "INFO":
            log_level = logging.INFO
        case "WARNING":
            log_level = logging.WARNING
        case "ERROR":
            log_level = logging.ERROR
        case "CRITICAL":
            log_level = logging.CRITICAL
        case _:
            raise ValueError(f"Invalid log level: {os.environ['LOG_LEVEL']}")
    logging.getLogger("pacy").setLevel(log_level)


@app.get("/environment", response_model=EnvironmentResponse)
def read_environment() -> EnvironmentResponse:
    """Get the environment the app is running in."""
    return EnvironmentResponse(environment=get_current_environment())
