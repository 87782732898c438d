"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the repository
and client-side ports for fast, isolated testing. No database, network
or browser required.

Usage:
    from tests.fakes import FakeWorkoutRepository, create_workout_repo

    # Direct instantiation
    repo = FakeWorkoutRepository()
    repo.seed([{"id": "w1", "kind": "running", ...}])

    # Factory function with pre-populated data
    repo = create_workout_repo(num_running=2, num_cycling=1)
"""
from typing import Any, Dict
import uuid
from datetime import datetime, timedelta, timezone

from tests.fakes.workout_repository import FakeWorkoutRepository
from tests.fakes.client import (
    FakeGeolocation,
    FakeMapWidget,
    FakeMarker,
    FakeNotifier,
    FakeWorkoutApi,
)


# =============================================================================
# Factory Functions
# =============================================================================


def running_document(**overrides: Any) -> Dict[str, Any]:
    """A valid stored running workout document."""
    document = {
        "id": str(uuid.uuid4()),
        "kind": "running",
        "distance": 5.2,
        "duration": 24.0,
        "coordinates": {"latitude": 39.0, "longitude": -12.0},
        "cadence": 178.0,
        "customMetrics": {},
        "createdAt": "2026-04-14T08:00:00+00:00",
    }
    document.update(overrides)
    return document


def cycling_document(**overrides: Any) -> Dict[str, Any]:
    """A valid stored cycling workout document."""
    document = {
        "id": str(uuid.uuid4()),
        "kind": "cycling",
        "distance": 27.0,
        "duration": 95.0,
        "coordinates": {"latitude": 46.1, "longitude": 7.3},
        "elevationGain": 523.0,
        "customMetrics": {},
        "createdAt": "2026-03-04T17:30:00+00:00",
    }
    document.update(overrides)
    return document


def create_workout_repo(
    *,
    num_running: int = 0,
    num_cycling: int = 0,
) -> FakeWorkoutRepository:
    """
    Create a FakeWorkoutRepository with pre-populated workouts.

    Documents get increasing createdAt values, running ones first.

    Args:
        num_running: Number of running workouts to generate
        num_cycling: Number of cycling workouts to generate

    Returns:
        FakeWorkoutRepository with seeded data
    """
    repo = FakeWorkoutRepository()
    start = datetime(2026, 1, 1, 7, 0, tzinfo=timezone.utc)

    documents = [running_document() for _ in range(num_running)]
    documents += [cycling_document() for _ in range(num_cycling)]
    for i, document in enumerate(documents):
        document["createdAt"] = (start + timedelta(days=i)).isoformat()

    repo.seed(documents)
    return repo


__all__ = [
    # Repositories
    "FakeWorkoutRepository",
    # Client ports
    "FakeGeolocation",
    "FakeMapWidget",
    "FakeMarker",
    "FakeNotifier",
    "FakeWorkoutApi",
    # Factories
    "create_workout_repo",
    "running_document",
    "cycling_document",
]
