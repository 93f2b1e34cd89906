"""Persisting Strava tokens in the settings store."""

from collections.abc import Mapping
import logging

import httpx

from pacy.settings import SettingsStore
from .auth import StravaAuthError, exchange_code_for_token
from .models import StravaToken

STRAVA_ACCESS_TOKEN_KEY = "strava_access_token"
STRAVA_REFRESH_TOKEN_KEY = "strava_refresh_token"
STRAVA_EXPIRES_AT_KEY = "strava_expires_at"

logger = logging.getLogger(__name__)


def save_strava_token(store: SettingsStore, token: StravaToken) -> None:
    store.set(STRAVA_ACCESS_TOKEN_KEY, token.access_token)
    store.set(STRAVA_REFRESH_TOKEN_KEY, token.refresh_token)
    if token.expires_at is not None:
        store.set(STRAVA_EXPIRES_AT_KEY, str(token.expires_at))


def load_strava_token(store: SettingsStore) -> StravaToken | None:
    """Get the stored Strava token, or None if Strava was never connected."""
    access_token = store.get(STRAVA_ACCESS_TOKEN_KEY)
    if not access_token:
        return None
    expires_at = store.get(STRAVA_EXPIRES_AT_KEY)
    try:
        expires_at_value = int(float(expires_at)) if expires_at else None
    except ValueError:
        logger.warning(f"Ignoring unreadable {STRAVA_EXPIRES_AT_KEY}: {expires_at!r}")
        expires_at_value = None
    return StravaToken(
        access_token=access_token,
        refresh_token=store.get(STRAVA_REFRESH_TOKEN_KEY) or "",
        expires_at=expires_at_value,
    )


def token_from_callback_params(params: Mapping[str, str]) -> StravaToken | None:
    """Read a token handed over directly in a redirect's query parameters.

    All three of access_token, refresh_token and expires_at must be present and
    non-empty.
    """
    access_token = params.get("access_token")
    refresh_token = params.get("refresh_token")
    expires_at = params.get("expires_at")
    if not (access_token and refresh_token and expires_at):
        return None
    try:
        expires_at_value = int(float(expires_at))
    except ValueError:
        logger.warning(f"Callback carried an unreadable expires_at: {expires_at!r}")
        return None
    return StravaToken(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at_value,
    )


async def connect_strava(code: str, store: SettingsStore) -> bool:
    """Exchange an authorization code and persist the resulting token.

    Returns:
        True if a token was obtained and saved, False otherwise.
    """
    try:
        token = await exchange_code_for_token(code)
    except (StravaAuthError, httpx.HTTPError) as e:
        logger.error(
            f"Failed to exchange code for Strava token: "
            f"exception_type={type(e).__name__}, error={e}"
        )
        return False
    save_strava_token(store, token)
    logger.info("Connected Strava and saved the access token")
    return True
