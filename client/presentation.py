"""
Keeps the map markers and the workout list in step with WorkoutStore.

PresentationSync owns the per-workout projections (one marker and one row
per id), the pending location picked on the map and the form state:

    idle --bootstrap--> awaitingLocation --click--> formOpen
    formOpen --submit--> submitting --ok--> awaitingLocation
                                    --fail--> formOpen

Nothing is shown before the server has confirmed it; a failed call leaves
the projections exactly as they were.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from client.api_client import WorkoutApiClient, WorkoutClientError
from client.ports import (
    GeolocationError,
    GeolocationProvider,
    MapWidget,
    MarkerHandle,
    Notifier,
)
from client.rendering import WorkoutRow, newest_first, popup_class, popup_content
from client.state_store import WorkoutStore
from domain.exceptions import WorkoutValidationError
from domain.models import (
    Coordinates,
    Workout,
    WorkoutKind,
    construct_workout,
    required_metric_field,
)

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 13

LOCATION_UNAVAILABLE_MESSAGE = "Could not get your location"
LOCATION_REQUIRED_MESSAGE = "Click on the map to set a location first."
SUBMIT_IN_PROGRESS_MESSAGE = "Please wait, the previous workout is still being saved."
CREATE_FAILED_MESSAGE = "Failed to create workout."
DELETE_FAILED_MESSAGE = "Failed to delete workout."


class FormState(str, Enum):
    IDLE = "idle"
    AWAITING_LOCATION = "awaitingLocation"
    FORM_OPEN = "formOpen"
    SUBMITTING = "submitting"


@dataclass
class WorkoutForm:
    """Values typed into the workout form; numbers may still be strings."""

    kind: str
    distance: Any
    duration: Any
    cadence: Any = None
    elevation_gain: Any = None
    custom_metrics: Dict[str, Any] = field(default_factory=dict)

    def metric_for_kind(self) -> Dict[str, Any]:
        """Only the metric the chosen kind uses; the hidden input is ignored."""
        if self.kind == WorkoutKind.RUNNING.value:
            return {"cadence": self.cadence}
        if self.kind == WorkoutKind.CYCLING.value:
            return {"elevation_gain": self.elevation_gain}
        return {}


class PresentationSync:
    """
    Map/list projection of the client's workouts.

    Usage:
        >>> sync = PresentationSync(store, api, widget, notifier)
        >>> await sync.bootstrap(geolocation)
        >>> sync.handle_map_click(Coordinates(latitude=51.5, longitude=-0.1))
        >>> await sync.submit(WorkoutForm(kind="running", distance=5,
        ...                               duration=30, cadence=180))
    """

    def __init__(
        self,
        store: WorkoutStore,
        api: WorkoutApiClient,
        widget: MapWidget,
        notifier: Notifier,
        zoom: int = DEFAULT_ZOOM,
    ) -> None:
        self._store = store
        self._api = api
        self._widget = widget
        self._notifier = notifier
        self._zoom = zoom

        self._markers: Dict[str, MarkerHandle] = {}
        self._rows: Dict[str, WorkoutRow] = {}
        self._pending_location: Optional[Coordinates] = None
        self._state = FormState.IDLE
        self._form_kind = WorkoutKind.RUNNING

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def pending_location(self) -> Optional[Coordinates]:
        return self._pending_location

    @property
    def markers(self) -> Mapping[str, MarkerHandle]:
        return dict(self._markers)

    @property
    def rows(self) -> List[WorkoutRow]:
        """Rendered list rows, newest workout first."""
        return [
            self._rows[w.id] for w in newest_first(self._store) if w.id in self._rows
        ]

    @property
    def form_kind(self) -> WorkoutKind:
        return self._form_kind

    @property
    def visible_metric(self) -> str:
        """Wire name of the metric input the form currently shows."""
        return required_metric_field(self._form_kind)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def bootstrap(self, geolocation: GeolocationProvider) -> bool:
        """
        Center the map on the user, start listening for clicks and load
        the workouts.

        Returns:
            False if the position could not be determined (state stays idle)
        """
        try:
            position = await geolocation.current_position()
        except GeolocationError as e:
            logger.warning(f"Geolocation failed: {e}")
            self._notifier.notify(LOCATION_UNAVAILABLE_MESSAGE)
            return False

        self._widget.set_view(position, self._zoom)
        self._widget.on_click(self.handle_map_click)
        self._state = FormState.AWAITING_LOCATION

        await self.refresh()
        return True

    async def refresh(self) -> bool:
        """
        Reload from the server and rebuild every marker and row.

        Returns:
            False if loading failed; the current projections are kept
        """
        workouts = await self._store.load_all()
        if workouts is None:
            return False

        for handle in self._markers.values():
            self._widget.remove_marker(handle)
        self._markers = {}
        self._rows = {}

        for workout in workouts:
            self._render(workout)
        return True

    # -------------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------------

    def handle_map_click(self, position: Coordinates) -> None:
        """Remember the clicked position; the last click wins."""
        self._pending_location = position
        if self._state in (FormState.AWAITING_LOCATION, FormState.FORM_OPEN):
            self._state = FormState.FORM_OPEN

    def select_kind(self, kind: "WorkoutKind | str") -> str:
        """
        Switch the form between running and cycling.

        Returns:
            Wire name of the metric input that is now visible

        Raises:
            WorkoutValidationError: If kind is not a known variant
        """
        metric = required_metric_field(kind)
        self._form_kind = WorkoutKind(kind)
        return metric

    async def submit(self, form: WorkoutForm) -> Optional[Workout]:
        """
        Validate the form locally, create the workout and render it.

        Returns:
            The created workout, or None if the submission was refused or
            failed (the user has been notified)
        """
        if self._state is FormState.SUBMITTING:
            self._notifier.notify(SUBMIT_IN_PROGRESS_MESSAGE)
            return None

        submitted_location = self._pending_location
        if submitted_location is None:
            self._notifier.notify(LOCATION_REQUIRED_MESSAGE)
            return None

        try:
            workout = construct_workout(
                kind=form.kind,
                distance=form.distance,
                duration=form.duration,
                coordinates=submitted_location,
                custom_metrics=form.custom_metrics,
                **form.metric_for_kind(),
            )
        except WorkoutValidationError as e:
            self._notifier.notify(e.message)
            return None

        self._state = FormState.SUBMITTING
        saved: Optional[Workout] = None
        try:
            created = await self._api.create_workout(workout.to_payload())
            saved = self._store.add(created, submitted_location)
        except (WorkoutClientError, WorkoutValidationError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to create workout: {e}")
            self._notifier.notify(CREATE_FAILED_MESSAGE)
            return None
        finally:
            if saved is None:
                self._state = FormState.FORM_OPEN

        self._render(saved)
        self._pending_location = None
        self._state = FormState.AWAITING_LOCATION
        return saved

    # -------------------------------------------------------------------------
    # Selection and deletion
    # -------------------------------------------------------------------------

    def select(self, workout_id: str) -> bool:
        """
        Center the map on a workout's marker and re-open its popup.

        Returns:
            False if the workout has no marker
        """
        handle = self._markers.get(workout_id)
        workout = self._store.get(workout_id)
        if handle is None or workout is None or workout.coordinates is None:
            return False

        self._widget.set_view(workout.coordinates, self._zoom)
        handle.open_popup()
        return True

    async def delete(self, workout_id: str) -> bool:
        """
        Delete a workout on the server, then drop it from every projection.

        Returns:
            False if the server call failed (nothing changes locally)
        """
        try:
            await self._api.delete_workout(workout_id)
        except WorkoutClientError as e:
            logger.error(f"Failed to delete workout {workout_id}: {e}")
            self._notifier.notify(DELETE_FAILED_MESSAGE)
            return False

        self._store.remove(workout_id)
        self._rows.pop(workout_id, None)
        handle = self._markers.pop(workout_id, None)
        if handle is not None:
            self._widget.remove_marker(handle)
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _render(self, workout: Workout) -> None:
        """
        Add the row and, when the workout has a position, its marker.

        A marker already shown for the same id is released first, so each
        workout keeps exactly one.
        """
        previous = self._markers.pop(workout.id, None)
        if previous is not None:
            self._widget.remove_marker(previous)

        self._rows[workout.id] = WorkoutRow.from_workout(workout)
        if workout.coordinates is not None:
            self._markers[workout.id] = self._widget.add_marker(
                workout.coordinates, popup_content(workout), popup_class(workout)
            )
