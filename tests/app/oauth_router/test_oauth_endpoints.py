"""Tests for the Strava OAuth endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from pacy.integrations.strava import StravaAuthError, StravaToken, load_strava_token
from pacy.integrations.strava import save_strava_token
from pacy.settings import InMemorySettingsStore

# 2031-01-01 and 2020-01-01, UTC
FUTURE_EXPIRY = 1924992000
PAST_EXPIRY = 1577836800


class TestStravaStatus:
    def test_status_not_connected(self, client: TestClient):
        response = client.get("/oauth/strava/status")

        assert response.status_code == 200
        assert response.json() == {
            "authorized": False,
            "access_token_valid": None,
            "expires_at": None,
        }

    def test_status_with_valid_token(
        self, client: TestClient, settings: InMemorySettingsStore
    ):
        save_strava_token(
            settings,
            StravaToken(access_token="a", refresh_token="r", expires_at=FUTURE_EXPIRY),
        )

        data = client.get("/oauth/strava/status").json()

        assert data["authorized"] is True
        assert data["access_token_valid"] is True
        assert data["expires_at"].startswith("2031-01-01")

    def test_status_with_expired_token(
        self, client: TestClient, settings: InMemorySettingsStore
    ):
        save_strava_token(
            settings,
            StravaToken(access_token="a", refresh_token="r", expires_at=PAST_EXPIRY),
        )

        data = client.get("/oauth/strava/status").json()

        assert data["authorized"] is True
        assert data["access_token_valid"] is False


class TestStravaAuthorize:
    def test_authorize_redirects(self, client: TestClient):
        with patch(
            "pacy.app.routers.oauth.PUBLIC_API_BASE_URL", "https://api.example.com"
        ):
            response = client.get("/oauth/strava/authorize", follow_redirects=False)

        assert response.status_code == 307
        location = response.headers["location"]
        assert location.startswith("https://www.strava.com/oauth/authorize?")
        assert (
            "redirect_uri=https%3A%2F%2Fapi.example.com%2Foauth%2Fstrava%2Fcallback"
            in location
        )


class TestStravaCallback:
    def test_callback_with_code(
        self, client: TestClient, settings: InMemorySettingsStore
    ):
        token = StravaToken(
            access_token="a", refresh_token="r", expires_at=FUTURE_EXPIRY
        )
        with patch(
            "pacy.integrations.strava.tokens.exchange_code_for_token",
            AsyncMock(return_value=token),
        ) as mock_exchange:
            response = client.get("/oauth/strava/callback", params={"code": "abc"})

        assert response.status_code == 200
        assert response.json()["authorized"] is True
        mock_exchange.assert_awaited_once_with("abc")
        assert load_strava_token(settings) == token

    def test_callback_with_failed_exchange(
        self, client: TestClient, settings: InMemorySettingsStore
    ):
        with patch(
            "pacy.integrations.strava.tokens.exchange_code_for_token",
            AsyncMock(side_effect=StravaAuthError("bad code")),
        ):
            response = client.get("/oauth/strava/callback", params={"code": "abc"})

        assert response.status_code == 200
        assert response.json()["authorized"] is False
        assert settings.values == {}

    def test_callback_with_token(
        self, client: TestClient, settings: InMemorySettingsStore
    ):
        response = client.get(
            "/oauth/strava/callback",
            params={
                "access_token": "a",
                "refresh_token": "r",
                "expires_at": str(FUTURE_EXPIRY),
            },
        )

        assert response.status_code == 200
        assert response.json()["access_token_valid"] is True
        assert settings.values["strava_access_token"] == "a"

    def test_callback_without_code_or_token(
        self, client: TestClient, settings: InMemorySettingsStore
    ):
        response = client.get("/oauth/strava/callback", params={"error": "denied"})
        assert response.json()["authorized"] is False
        assert settings.values == {}
