from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from pacy.app import dependencies
from pacy.app.app import app
from pacy.live import LiveWorkoutSession
from pacy.settings import InMemorySettingsStore
from pacy.store import InMemoryActivityStore
from pacy.workouts import WorkoutHistory


@pytest.fixture
def settings() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def store() -> InMemoryActivityStore:
    return InMemoryActivityStore()


@pytest.fixture
def session() -> LiveWorkoutSession:
    return LiveWorkoutSession(max_pulse=200)


@pytest.fixture
def history(store: InMemoryActivityStore) -> WorkoutHistory:
    return WorkoutHistory(store=store)


@pytest.fixture
def client(
    settings: InMemorySettingsStore,
    store: InMemoryActivityStore,
    session: LiveWorkoutSession,
    history: WorkoutHistory,
) -> Iterator[TestClient]:
    """Test client backed by in-memory stores instead of the database."""
    app.dependency_overrides[dependencies.settings_store] = lambda: settings
    app.dependency_overrides[dependencies.activity_store] = lambda: store
    app.dependency_overrides[dependencies.live_session] = lambda: session
    app.dependency_overrides[dependencies.workout_history] = lambda: history
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
