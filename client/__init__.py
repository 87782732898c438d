"""
Map client for the workout API.

This package contains:
- api_client: async HTTP transport for /workouts
- state_store: WorkoutStore, the client's single collection of workouts
- presentation: PresentationSync, keeping markers and list rows in step
- rendering: list row and popup view models
- ports: MapWidget, GeolocationProvider and Notifier interfaces
- folium_map, adapters: shipped implementations of those ports
"""

from client.api_client import (
    WorkoutApiClient,
    WorkoutApiError,
    WorkoutApiUnavailable,
    WorkoutClientError,
)
from client.ports import GeolocationError
from client.presentation import FormState, PresentationSync, WorkoutForm
from client.state_store import WorkoutStore

__all__ = [
    "WorkoutApiClient",
    "WorkoutApiError",
    "WorkoutApiUnavailable",
    "WorkoutClientError",
    "GeolocationError",
    "FormState",
    "PresentationSync",
    "WorkoutForm",
    "WorkoutStore",
]
