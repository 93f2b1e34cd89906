from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pacy.integrations.strava.auth import StravaAuthError
from pacy.integrations.strava.models import StravaToken
from pacy.integrations.strava.tokens import (
    connect_strava,
    load_strava_token,
    save_strava_token,
    token_from_callback_params,
)
from pacy.settings import InMemorySettingsStore

TOKEN = StravaToken(
    access_token="access", refresh_token="refresh", expires_at=1714812600
)


def test_save_and_load_token():
    store = InMemorySettingsStore()
    save_strava_token(store, TOKEN)
    assert store.values == {
        "strava_access_token": "access",
        "strava_refresh_token": "refresh",
        "strava_expires_at": "1714812600",
    }
    assert load_strava_token(store) == TOKEN


def test_load_token_never_connected():
    assert load_strava_token(InMemorySettingsStore()) is None


def test_load_token_with_unreadable_expiry():
    store = InMemorySettingsStore(
        {
            "strava_access_token": "access",
            "strava_refresh_token": "refresh",
            "strava_expires_at": "soon",
        }
    )
    token = load_strava_token(store)
    assert token is not None
    assert token.expires_at is None


def test_token_from_callback_params():
    token = token_from_callback_params(
        {"access_token": "a", "refresh_token": "r", "expires_at": "1714812600"}
    )
    assert token == StravaToken(
        access_token="a", refresh_token="r", expires_at=1714812600
    )


@pytest.mark.parametrize(
    "params",
    [
        {"access_token": "a", "refresh_token": "r"},
        {"access_token": "a", "refresh_token": "", "expires_at": "1714812600"},
        {"access_token": "a", "refresh_token": "r", "expires_at": "tomorrow"},
        {"code": "abc"},
    ],
)
def test_token_from_callback_params_incomplete(params):
    assert token_from_callback_params(params) is None


@pytest.mark.asyncio
async def test_connect_strava():
    store = InMemorySettingsStore()
    with patch(
        "pacy.integrations.strava.tokens.exchange_code_for_token",
        AsyncMock(return_value=TOKEN),
    ) as mock_exchange:
        assert await connect_strava("code", store) is True

    mock_exchange.assert_awaited_once_with("code")
    assert load_strava_token(store) == TOKEN


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [StravaAuthError("rejected"), httpx.ConnectTimeout("timed out")]
)
async def test_connect_strava_failure(error):
    store = InMemorySettingsStore()
    with patch(
        "pacy.integrations.strava.tokens.exchange_code_for_token",
        AsyncMock(side_effect=error),
    ):
        assert await connect_strava("code", store) is False
    assert store.values == {}
