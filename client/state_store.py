"""
Client-side workout collection.

WorkoutStore is the single source of truth for the workouts the client
shows. Workouts are frozen entities, so the map and list projections can
share references with the store.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from client.api_client import WorkoutApiClient, WorkoutClientError
from client.ports import Notifier
from domain.exceptions import WorkoutValidationError
from domain.models import Coordinates, Workout

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch workouts."


class WorkoutStore:
    """
    Ordered, id-keyed collection of workouts loaded from the API.

    Insertion order follows the server's order for ``load_all`` and append
    order for ``add``.
    """

    def __init__(self, api: WorkoutApiClient, notifier: Notifier) -> None:
        self._api = api
        self._notifier = notifier
        self._workouts: Dict[str, Workout] = {}

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load_all(self) -> Optional[List[Workout]]:
        """
        Replace the local collection with the server's workouts.

        The swap happens only after every document has been rehydrated.

        Returns:
            The loaded workouts, or None if fetching or parsing failed (the
            user is notified and the previous collection is kept)
        """
        try:
            documents = await self._api.list_workouts()
            workouts = [Workout.from_document(doc) for doc in documents]
        except (
            WorkoutClientError,
            WorkoutValidationError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            logger.error(f"Failed to load workouts: {e}")
            self._notifier.notify(FETCH_FAILED_MESSAGE)
            return None

        self._workouts = {w.id: w for w in workouts if w.id is not None}
        logger.info(f"Loaded {len(self._workouts)} workouts")
        return list(self._workouts.values())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(
        self,
        created_document: Mapping[str, Any],
        submitted_coordinates: Optional[Coordinates] = None,
    ) -> Workout:
        """
        Record a workout the server has just created.

        Args:
            created_document: Document returned by the create call
            submitted_coordinates: Position the user clicked, used when the
                server response leaves coordinates out

        Returns:
            The stored workout

        Raises:
            WorkoutValidationError: If the document has no id or no
                coordinates can be determined
        """
        workout = Workout.from_document(created_document)
        if workout.id is None:
            raise WorkoutValidationError("id", "is missing from the created workout")

        if workout.coordinates is None:
            if submitted_coordinates is None:
                raise WorkoutValidationError("coordinates", "are required")
            workout = workout.model_copy(update={"coordinates": submitted_coordinates})

        self._workouts[workout.id] = workout
        return workout

    def remove(self, workout_id: str) -> Optional[Workout]:
        """Drop a workout; returns it, or None if it was not held."""
        return self._workouts.pop(workout_id, None)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, workout_id: str) -> Optional[Workout]:
        return self._workouts.get(workout_id)

    def all(self) -> List[Workout]:
        """Snapshot of every workout in insertion order."""
        return list(self._workouts.values())

    def __iter__(self) -> Iterator[Workout]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._workouts)

    def __contains__(self, workout_id: object) -> bool:
        return workout_id in self._workouts
