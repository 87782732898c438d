"""
Workout Gateway.

Enforces the workout entity rules on every write path before anything
reaches the document store, and rehydrates stored documents on reads.

Failures are raised as typed exceptions:
- WorkoutValidationError: input violates an entity rule (nothing persisted)
- WorkoutNotFoundError: unknown workout id
- WorkoutStoreError: the store itself failed (raised by the repository)
"""

import logging
from typing import Any, Dict, List, Mapping

from application.exceptions import WorkoutNotFoundError
from application.ports import WorkoutRepository
from domain.exceptions import WorkoutValidationError
from domain.models import Workout, canonical_key, required_metric_field

logger = logging.getLogger(__name__)

_METRIC_KEYS = ("cadence", "elevationGain")
_IGNORED_UPDATE_KEYS = ("id", "description")


class WorkoutGateway:
    """
    CRUD operations over workout documents with invariant enforcement.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> gateway = WorkoutGateway(workout_repo=workout_repo)
        >>> workout = gateway.create({
        ...     "kind": "running",
        ...     "distance": 5,
        ...     "duration": 30,
        ...     "coordinates": {"latitude": 51.5, "longitude": -0.1},
        ...     "cadence": 180,
        ... })
        >>> gateway.get_by_id(workout.id) == workout
        True
    """

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        """
        Initialize the gateway with its store.

        Args:
            workout_repo: Repository for persisting workout documents
        """
        self._workout_repo = workout_repo

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list(self) -> List[Workout]:
        """Get all workouts in the store's stable order."""
        return [Workout.from_document(doc) for doc in self._workout_repo.list_all()]

    def get_by_id(self, workout_id: str) -> Workout:
        """
        Get one workout.

        Raises:
            WorkoutNotFoundError: If no workout has this id
        """
        document = self._workout_repo.get(workout_id)
        if document is None:
            raise WorkoutNotFoundError(workout_id)
        return Workout.from_document(document)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, fields: Mapping[str, Any]) -> Workout:
        """
        Validate and store a new workout.

        Args:
            fields: Raw wire fields (kind, distance, duration, coordinates, ...)

        Returns:
            The stored workout with its assigned id

        Raises:
            WorkoutValidationError: If the fields violate an entity rule or
                carry an id (ids are assigned by the store)
        """
        try:
            workout = Workout.from_payload(fields)
            if not workout.is_new:
                raise WorkoutValidationError("id", "is assigned by the server")
        except WorkoutValidationError as e:
            logger.warning(f"Rejected new workout: {e}")
            raise

        stored = self._workout_repo.insert(workout.to_document())
        saved = Workout.from_document(stored)
        logger.info(f"Workout created: {saved.id} ({saved.kind.value})")
        return saved

    def update(self, workout_id: str, partial_fields: Mapping[str, Any]) -> Workout:
        """
        Overlay partial fields on a stored workout and re-validate the result.

        When ``kind`` changes, the previous kind's metric is dropped before
        the overlay, so the new kind's metric has to be supplied.

        Args:
            workout_id: Workout identifier
            partial_fields: Fields to change (wire or Python names)

        Returns:
            The stored, updated workout

        Raises:
            WorkoutNotFoundError: If no workout has this id
            WorkoutValidationError: If the merged workout violates a rule
        """
        if not isinstance(partial_fields, Mapping):
            raise WorkoutValidationError("workout", "must be an object")

        existing = self._workout_repo.get(workout_id)
        if existing is None:
            raise WorkoutNotFoundError(workout_id)

        try:
            merged = self._merge(workout_id, existing, partial_fields)
            workout = Workout.from_payload(merged)
        except WorkoutValidationError as e:
            logger.warning(f"Rejected update for workout {workout_id}: {e}")
            raise

        stored = self._workout_repo.replace(workout_id, workout.to_document())
        if stored is None:
            # Deleted between the read and the write.
            raise WorkoutNotFoundError(workout_id)

        logger.info(f"Workout updated: {workout_id}")
        return Workout.from_document(stored)

    def delete(self, workout_id: str) -> None:
        """
        Delete a workout.

        Raises:
            WorkoutNotFoundError: If no workout has this id
        """
        if not self._workout_repo.delete(workout_id):
            raise WorkoutNotFoundError(workout_id)
        logger.info(f"Workout deleted: {workout_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _merge(
        workout_id: str,
        existing: Mapping[str, Any],
        partial_fields: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """Build the full document an update would produce."""
        changes = {canonical_key(key): value for key, value in partial_fields.items()}

        supplied_id = changes.get("id")
        if supplied_id is not None and str(supplied_id) != workout_id:
            raise WorkoutValidationError("id", "cannot be changed")

        merged = {
            canonical_key(key): value
            for key, value in existing.items()
            if key != "description"
        }

        new_kind = changes.get("kind", merged.get("kind"))
        if new_kind != merged.get("kind"):
            kept_metric = _metric_for(new_kind)
            for key in _METRIC_KEYS:
                if key != kept_metric:
                    merged.pop(key, None)

        for key, value in changes.items():
            if key not in _IGNORED_UPDATE_KEYS:
                merged[key] = value

        merged["id"] = workout_id
        return merged


def _metric_for(kind: Any) -> Any:
    """Metric key the kind requires, or None for an unknown kind."""
    try:
        return required_metric_field(kind)
    except WorkoutValidationError:
        return None
