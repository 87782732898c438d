"""
Workout Repository Interface (Port).

This module defines the abstract interface for workout document storage.
Implementations may use Supabase, in-memory storage, or other backends.
The store is dumb: it persists whatever documents it is handed. Entity
rules are enforced one layer up, in WorkoutGateway.
"""
from typing import Any, Dict, List, Optional, Protocol


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout document persistence.

    Documents use the canonical wire names (``kind``, ``coordinates``,
    ``elevationGain``, ``customMetrics``, ``createdAt``...). Implementations
    raise WorkoutStoreError when the underlying store fails; a missing
    document is reported through the return value, never an exception.
    """

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store a new workout document and assign its id.

        Args:
            document: Workout document without ``id``

        Returns:
            The stored document including the assigned ``id``

        Raises:
            WorkoutStoreError: If the store rejects or fails the write
        """
        ...

    def get(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single workout document by ID.

        Args:
            workout_id: Workout identifier

        Returns:
            Workout document or None if not found
        """
        ...

    def list_all(self) -> List[Dict[str, Any]]:
        """
        Get every workout document.

        Returns:
            List of documents in a stable order (created_at, then id)
        """
        ...

    def replace(
        self,
        workout_id: str,
        document: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Replace a stored document with a full new version.

        Args:
            workout_id: Workout identifier
            document: Complete replacement document (``id`` is ignored)

        Returns:
            The stored document, or None if no workout has this id
        """
        ...

    def delete(self, workout_id: str) -> bool:
        """
        Delete a workout document.

        Args:
            workout_id: Workout identifier

        Returns:
            True if deleted, False if not found
        """
        ...
