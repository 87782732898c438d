"""
Shared pytest fixtures for the workout service and map client.

Server tests run the real WorkoutGateway on a FakeWorkoutRepository by
overriding get_workout_repo. Client tests wire WorkoutStore and
PresentationSync to the fakes in tests/fakes.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.deps import get_workout_repo
from application.use_cases import WorkoutGateway
from backend.main import create_app
from backend.settings import Settings
from client.presentation import PresentationSync
from client.state_store import WorkoutStore
from tests.fakes import (
    FakeMapWidget,
    FakeNotifier,
    FakeWorkoutApi,
    FakeWorkoutRepository,
)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with a (fake) configured database."""
    return Settings(
        environment="test",
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-key",
        _env_file=None,
    )


@pytest.fixture
def app(test_settings):
    """Create test application instance."""
    return create_app(settings=test_settings)


@pytest.fixture
def fake_workout_repo() -> FakeWorkoutRepository:
    """A fresh, empty in-memory workout store."""
    return FakeWorkoutRepository()


@pytest.fixture
def gateway(fake_workout_repo) -> WorkoutGateway:
    """WorkoutGateway backed by the fake store."""
    return WorkoutGateway(workout_repo=fake_workout_repo)


@pytest.fixture
def client(app, fake_workout_repo) -> Generator[TestClient, None, None]:
    """
    Per-test FastAPI TestClient using the fake store.
    Properly cleans up dependency overrides after each test.
    """
    app.dependency_overrides[get_workout_repo] = lambda: fake_workout_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_api() -> FakeWorkoutApi:
    return FakeWorkoutApi()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def widget() -> FakeMapWidget:
    return FakeMapWidget()


@pytest.fixture
def store(fake_api, notifier) -> WorkoutStore:
    return WorkoutStore(fake_api, notifier)


@pytest.fixture
def sync(store, fake_api, widget, notifier) -> PresentationSync:
    return PresentationSync(store, fake_api, widget, notifier)
