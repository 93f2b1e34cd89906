from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import json
import logging
import os

import httpx

from pacy.settings import SettingsStore
from .auth import StravaAuthError, refresh_access_token_sync
from .models import StravaActivityUpload, StravaToken
from .tokens import save_strava_token

logger = logging.getLogger(__name__)

ACTIVITIES_URL = os.environ.get(
    "STRAVA_ACTIVITIES_URL", "https://www.strava.com/api/v3/activities"
)


@dataclass
class StravaClient:
    token: StravaToken
    settings: SettingsStore

    def needs_token_refresh(self) -> bool:
        """Check if the access token needs to be refreshed.

        Returns:
            True if token is expired or expires within 5 minutes, False otherwise.
        """
        expires_at = self.token.expires_at_datetime()
        if expires_at is None or not self.token.refresh_token:
            # Without an expiry or a refresh token there is nothing to do up front
            return False
        now = datetime.now(timezone.utc)
        return expires_at <= now + timedelta(minutes=5)

    def _refresh_access_token(self) -> bool:
        """Refresh the access token and persist it to the settings store.

        Returns:
            True if refresh was successful, False otherwise.
        """
        try:
            token = refresh_access_token_sync(self.token.refresh_token)
        except (StravaAuthError, httpx.HTTPError) as e:
            logger.error(
                f"Failed to refresh Strava access token: "
                f"exception_type={type(e).__name__}, error={e}"
            )
            return False
        save_strava_token(self.settings, token)
        self.token = token
        logger.info("Refreshed Strava access token and saved it to settings")
        return True

    def _auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token.access_token}",
        }

    def _make_request(
        self, method: str, url: str, **kwargs
    ) -> Optional[httpx.Response]:
        """Make an API request, refreshing the token first if it is about to expire.

        Returns None if the request could not be sent.
        """
        if self.needs_token_refresh():
            logger.info(
                "Strava access token expired or about to expire, refreshing proactively..."
            )
            if not self._refresh_access_token():
                logger.error(
                    f"Failed to refresh token proactively before {method} request to {url}"
                )
                # Continue anyway - the old token might still be accepted

        kwargs.setdefault("timeout", 10)

        try:
            with httpx.Client() as client:
                return client.request(
                    method, url, headers=self._auth_headers(), **kwargs
                )
        except httpx.HTTPError as e:
            logger.error(
                f"{method} request to {url} failed: "
                f"exception_type={type(e).__name__}, error={e}"
            )
            return None

    def upload_activity(self, upload: StravaActivityUpload) -> bool:
        """Create an activity on Strava.

        Succeeds on any 2xx response whose body is valid JSON. Failures are logged
        and reported as False; nothing is retried.
        """
        logger.info(f"Uploading activity to Strava: {upload.name}")
        response = self._make_request(
            "POST", ACTIVITIES_URL, data=upload.model_dump(mode="json")
        )
        if response is None:
            return False

        if not response.is_success:
            logger.error(
                f"Strava API returned error for upload: {response.status_code} {response.text}"
            )
            return False

        try:
            payload = response.json()
        except json.JSONDecodeError:
            logger.error(f"Strava returned an unparseable upload response: {response.text}")
            return False

        logger.info(f"Uploaded activity to Strava: {payload}")
        return True
