"""User settings persisted in a simple key-value store.

The store is passed in explicitly rather than read from global state, so tests and
alternative deployments can supply their own.
"""

import logging
from typing import Protocol

from pacy.config.thresholds import DEFAULT_MAX_PULSE
from pacy.db.settings import get_setting, upsert_setting

logger = logging.getLogger(__name__)

MAX_PULSE_KEY = "maxPulse"


class SettingsStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class DatabaseSettingsStore:
    """Settings kept in the `app_settings` table."""

    def get(self, key: str) -> str | None:
        return get_setting(key)

    def set(self, key: str, value: str) -> None:
        upsert_setting(key, value)


class InMemorySettingsStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


def load_max_pulse(store: SettingsStore) -> int:
    """Get the saved max heart rate, falling back to the default.

    A missing, zero or unreadable value counts as never having been saved.
    """
    raw = store.get(MAX_PULSE_KEY)
    if raw is None:
        return DEFAULT_MAX_PULSE
    try:
        max_pulse = int(raw)
    except ValueError:
        logger.warning(f"Ignoring unreadable {MAX_PULSE_KEY} setting: {raw!r}")
        return DEFAULT_MAX_PULSE
    return max_pulse if max_pulse > 0 else DEFAULT_MAX_PULSE


def save_max_pulse(store: SettingsStore, max_pulse: int) -> None:
    if max_pulse <= 0:
        raise ValueError(f"Max pulse must be a positive number, got {max_pulse}")
    store.set(MAX_PULSE_KEY, str(max_pulse))
    logger.info(f"Saved max pulse: {max_pulse}")

