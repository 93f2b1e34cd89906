import logging
import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from pacy.app.dependencies import settings_store
from pacy.integrations import strava
from pacy.settings import SettingsStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth", tags=["oauth"])

PUBLIC_API_BASE_URL = os.environ.get("PUBLIC_API_BASE_URL", "http://localhost:8000")


class OAuthIntegrationStatus(BaseModel):
    """Status of the Strava connection."""

    authorized: bool
    access_token_valid: bool | None = None
    expires_at: str | None = None


def _status(settings: SettingsStore) -> OAuthIntegrationStatus:
    token = strava.load_strava_token(settings)
    if token is None:
        return OAuthIntegrationStatus(authorized=False)
    expires_at = token.expires_at_datetime()
    if expires_at is None:
        return OAuthIntegrationStatus(authorized=True)
    return OAuthIntegrationStatus(
        authorized=True,
        access_token_valid=expires_at > datetime.now(timezone.utc),
        expires_at=expires_at.isoformat(),
    )


@router.get("/strava/status", response_model=OAuthIntegrationStatus)
def strava_status(
    settings: SettingsStore = Depends(settings_store),
) -> OAuthIntegrationStatus:
    return _status(settings)


@router.get("/strava/authorize")
def strava_authorize() -> RedirectResponse:
    """Send the user to Strava to grant access."""
    url = strava.build_oauth_authorize_url(
        f"{PUBLIC_API_BASE_URL}/oauth/strava/callback"
    )
    return RedirectResponse(url)


@router.get("/strava/callback", response_model=OAuthIntegrationStatus)
async def strava_callback(
    request: Request,
    settings: SettingsStore = Depends(settings_store),
) -> OAuthIntegrationStatus:
    """Finish the OAuth flow.

    Accepts either an authorization code to exchange, or a token handed over
    directly as access_token, refresh_token and expires_at query parameters.
    """
    params = request.query_params
    token = strava.token_from_callback_params(params)
    if token is not None:
        await run_in_threadpool(strava.save_strava_token, settings, token)
        logger.info("Saved Strava token received in callback")
    elif code := params.get("code"):
        if not await strava.connect_strava(code, settings):
            logger.warning("Strava code exchange failed")
    else:
        logger.warning(
            f"Strava callback carried neither code nor token: {list(params.keys())}"
        )
    return await run_in_threadpool(_status, settings)
