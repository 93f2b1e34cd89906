from .auth import (
    refresh_access_token_sync,
    exchange_code_for_token,
    build_oauth_authorize_url,
    StravaAuthError,
)
from .client import StravaClient
from .models import StravaToken, StravaActivityUpload
from .tokens import (
    connect_strava,
    load_strava_token,
    save_strava_token,
    token_from_callback_params,
)

__all__ = [
    "refresh_access_token_sync",
    "exchange_code_for_token",
    "build_oauth_authorize_url",
    "StravaAuthError",
    "StravaClient",
    "StravaToken",
    "StravaActivityUpload",
    "connect_strava",
    "load_strava_token",
    "save_strava_token",
    "token_from_callback_params",
]
