from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pacy.integrations.strava.auth import (
    StravaAuthError,
    build_oauth_authorize_url,
    exchange_code_for_token,
    refresh_access_token_sync,
)

TOKEN_BODY = {
    "token_type": "Bearer",
    "access_token": "new_access_token",
    "refresh_token": "new_refresh_token",
    "expires_at": 1714812600,
    "expires_in": 21600,
}


def test_build_oauth_authorize_url(monkeypatch):
    monkeypatch.setattr("pacy.integrations.strava.auth.CLIENT_ID", "123")
    monkeypatch.setattr(
        "pacy.integrations.strava.auth.OAUTH_URL",
        "https://www.fakestrava.com/oauth/authorize",
    )
    url = build_oauth_authorize_url("https://examplecallback.com")
    assert (
        url
        == "https://www.fakestrava.com/oauth/authorize?client_id=123&redirect_uri=https%3A%2F%2Fexamplecallback.com&scope=activity%3Awrite%2Cactivity%3Aread_all&response_type=code"
    )


def test_build_oauth_authorize_url_with_state(monkeypatch):
    monkeypatch.setattr("pacy.integrations.strava.auth.CLIENT_ID", "123")
    url = build_oauth_authorize_url("https://examplecallback.com", state="abc")
    assert url.endswith("&response_type=code&state=abc")


def test_refresh_access_token_sync(monkeypatch):
    monkeypatch.setattr("pacy.integrations.strava.auth.CLIENT_ID", "123")
    monkeypatch.setattr("pacy.integrations.strava.auth.CLIENT_SECRET", "456")

    with patch("httpx.Client") as mock_client:
        mock_client_instance = mock_client.return_value.__enter__.return_value
        mock_client_instance.post.return_value = httpx.Response(200, json=TOKEN_BODY)

        token = refresh_access_token_sync("old_refresh_token")

    assert token.access_token == "new_access_token"
    assert token.refresh_token == "new_refresh_token"
    assert token.expires_at == 1714812600
    call_args = mock_client_instance.post.call_args
    assert call_args[1]["data"] == {
        "client_id": "123",
        "client_secret": "456",
        "refresh_token": "old_refresh_token",
        "grant_type": "refresh_token",
    }


def test_refresh_access_token_sync_rejected():
    with patch("httpx.Client") as mock_client:
        mock_client_instance = mock_client.return_value.__enter__.return_value
        mock_client_instance.post.return_value = httpx.Response(
            400, json={"message": "Bad Request"}
        )

        with pytest.raises(StravaAuthError, match="status 400"):
            refresh_access_token_sync("revoked")


def test_refresh_access_token_sync_unexpected_body():
    with patch("httpx.Client") as mock_client:
        mock_client_instance = mock_client.return_value.__enter__.return_value
        mock_client_instance.post.return_value = httpx.Response(
            200, json={"access_token": "only_half_a_token"}
        )

        with pytest.raises(StravaAuthError, match="unexpected response body"):
            refresh_access_token_sync("old_refresh_token")


@pytest.mark.asyncio
async def test_exchange_code_for_token():
    with patch("httpx.AsyncClient") as mock_client:
        mock_client_instance = AsyncMock()
        mock_client.return_value.__aenter__.return_value = mock_client_instance
        mock_client_instance.post.return_value = httpx.Response(200, json=TOKEN_BODY)

        token = await exchange_code_for_token("test_code")

    assert token.access_token == "new_access_token"
    call_args = mock_client_instance.post.call_args
    assert call_args[1]["data"]["code"] == "test_code"
    assert call_args[1]["data"]["grant_type"] == "authorization_code"


@pytest.mark.asyncio
async def test_exchange_code_for_token_rejected():
    with patch("httpx.AsyncClient") as mock_client:
        mock_client_instance = AsyncMock()
        mock_client.return_value.__aenter__.return_value = mock_client_instance
        mock_client_instance.post.return_value = httpx.Response(401, text="nope")

        with pytest.raises(StravaAuthError, match="nope"):
            await exchange_code_for_token("bad_code")
