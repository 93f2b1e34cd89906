import os
from urllib.parse import urlencode
import logging

import httpx
from pydantic import ValidationError

from .models import StravaToken

TOKEN_URL = os.environ.get("STRAVA_TOKEN_URL", "https://www.strava.com/oauth/token")
OAUTH_URL = os.environ.get(
    "STRAVA_OAUTH_URL", "https://www.strava.com/oauth/authorize"
)
CLIENT_ID = os.environ.get("STRAVA_CLIENT_ID", "")
CLIENT_SECRET = os.environ.get("STRAVA_CLIENT_SECRET", "")

logger = logging.getLogger(__name__)


class StravaAuthError(Exception):
    """Raised when Strava refuses a token request or returns an unusable token."""


def _parse_token_response(response: httpx.Response, action: str) -> StravaToken:
    if not response.is_success:
        raise StravaAuthError(
            f"Failed to {action} (status {response.status_code}): {response.text}"
        )
    try:
        return StravaToken.model_validate_json(response.content)
    except ValidationError as e:
        raise StravaAuthError(f"Failed to {action}: unexpected response body") from e


async def exchange_code_for_token(code: str) -> StravaToken:
    """Exchange a Strava authorization code for an access token.

    Args:
        code: The authorization code Strava passed to the OAuth callback

    Returns:
        StravaToken: A new token containing both access_token and refresh_token

    Raises:
        StravaAuthError: If the exchange request fails
    """
    async with httpx.AsyncClient(timeout=10) as client:
        response = await client.post(
            TOKEN_URL,
            data={
                "client_id": CLIENT_ID,
                "client_secret": CLIENT_SECRET,
                "code": code,
                "grant_type": "authorization_code",
            },
        )
    return _parse_token_response(response, "exchange Strava code")


def refresh_access_token_sync(refresh_token: str) -> StravaToken:
    """Refresh a Strava access token using a refresh token.

    Args:
        refresh_token: The refresh token to use for obtaining a new access token

    Returns:
        StravaToken: A new token containing both access_token and refresh_token

    Raises:
        StravaAuthError: If the refresh request fails
    """
    with httpx.Client(timeout=10) as client:
        response = client.post(
            TOKEN_URL,
            data={
                "client_id": CLIENT_ID,
                "client_secret": CLIENT_SECRET,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            },
        )
    return _parse_token_response(response, "refresh Strava token")


def build_oauth_authorize_url(redirect_uri: str, state: str | None = None) -> str:
    params = {
        "client_id": CLIENT_ID,
        "redirect_uri": redirect_uri,
        "scope": "activity:write,activity:read_all",
        "response_type": "code",
    }
    if state is not None:
        params["state"] = state
    url = f"{OAUTH_URL}?{urlencode(params)}"
    logger.info(f"Building OAuth authorize URL: {url}")
    return url
