"""
Fake client-side ports for testing PresentationSync and WorkoutStore.

Each fake records what it was asked to do so tests can assert on it.
"""
from typing import Any, Dict, List, Mapping, Optional
import copy
import uuid

from client.api_client import WorkoutApiUnavailable
from client.ports import ClickHandler, GeolocationError
from domain.models import Coordinates


class FakeMarker:
    """Marker handle that counts popup openings."""

    def __init__(self, position: Coordinates, popup: str, popup_class: str):
        self.position = position
        self.popup = popup
        self.popup_class = popup_class
        self.popup_opened = 0

    def open_popup(self) -> None:
        self.popup_opened += 1


class FakeMapWidget:
    """In-memory MapWidget."""

    def __init__(self):
        self.view: Optional[Coordinates] = None
        self.zoom: Optional[int] = None
        self.markers: List[FakeMarker] = []
        self.removed: List[FakeMarker] = []
        self.click_handlers: List[ClickHandler] = []

    def set_view(self, center: Coordinates, zoom: int) -> None:
        self.view = center
        self.zoom = zoom

    def add_marker(self, position: Coordinates, popup: str, popup_class: str) -> FakeMarker:
        marker = FakeMarker(position, popup, popup_class)
        self.markers.append(marker)
        return marker

    def remove_marker(self, handle: FakeMarker) -> None:
        self.markers.remove(handle)
        self.removed.append(handle)

    def on_click(self, handler: ClickHandler) -> None:
        self.click_handlers.append(handler)

    def click(self, latitude: float, longitude: float) -> None:
        """Simulate a user click on the map (test helper)."""
        for handler in self.click_handlers:
            handler(Coordinates(latitude=latitude, longitude=longitude))


class FakeNotifier:
    """Collects notices."""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class FakeGeolocation:
    """Returns a fixed position, or raises GeolocationError when denied."""

    def __init__(self, position: Optional[Coordinates] = None, denied: bool = False):
        self._position = position or Coordinates(latitude=51.5, longitude=-0.1)
        self._denied = denied

    async def current_position(self) -> Coordinates:
        if self._denied:
            raise GeolocationError("User denied Geolocation")
        return self._position


class FakeWorkoutApi:
    """
    In-memory stand-in for WorkoutApiClient.

    Set ``fail`` to make every call raise WorkoutApiUnavailable, or
    ``omit_coordinates`` to have create responses leave coordinates out.
    """

    def __init__(self, documents: Optional[List[Dict[str, Any]]] = None):
        self.documents: List[Dict[str, Any]] = [copy.deepcopy(d) for d in documents or []]
        self.fail = False
        self.omit_coordinates = False
        self.created_payloads: List[Dict[str, Any]] = []
        self.deleted_ids: List[str] = []
        self.calls = 0

    def _check(self) -> None:
        self.calls += 1
        if self.fail:
            raise WorkoutApiUnavailable("Workout API is not available")

    async def list_workouts(self) -> List[Dict[str, Any]]:
        self._check()
        return copy.deepcopy(self.documents)

    async def create_workout(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self._check()
        self.created_payloads.append(dict(payload))
        created = {
            **copy.deepcopy(dict(payload)),
            "id": str(uuid.uuid4()),
            "createdAt": "2026-04-14T08:00:00+00:00",
        }
        created.setdefault("customMetrics", {})
        self.documents.append(created)
        response = copy.deepcopy(created)
        if self.omit_coordinates:
            response.pop("coordinates", None)
        return response

    async def delete_workout(self, workout_id: str) -> None:
        self._check()
        self.deleted_ids.append(workout_id)
        self.documents = [d for d in self.documents if d["id"] != workout_id]
