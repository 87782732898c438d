"""
Supabase implementation of WorkoutRepository.

Workout documents are stored one row per workout in the ``workouts`` table
(see migrations/001_create_workouts.sql). Row/document conversion lives in
domain.converters.db_converters. The client is injected via constructor.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from supabase import Client

from application.exceptions import WorkoutStoreError
from domain.converters import db_row_to_document, document_to_db_row

logger = logging.getLogger(__name__)


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
        return True
    except ValueError:
        return False


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    All Supabase query logic for workouts is encapsulated here. Ids that are
    not UUIDs can never match a row and are reported as not found without a
    round trip.
    """

    def __init__(self, client: Client, table: str = "workouts"):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Name of the workouts table
        """
        self._client = client
        self._table = table

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new workout row; the database assigns the id."""
        row = document_to_db_row(document)
        try:
            result = self._client.table(self._table).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to insert workout: {e}")
            _log_permission_hint(e)
            raise WorkoutStoreError("Failed to insert workout") from e

        if not result.data:
            raise WorkoutStoreError("Insert returned no row")
        return db_row_to_document(result.data[0])

    def get(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """Get a single workout by ID."""
        if not _is_uuid(workout_id):
            return None
        try:
            result = (
                self._client.table(self._table)
                .select("*")
                .eq("id", workout_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get workout {workout_id}: {e}")
            raise WorkoutStoreError(f"Failed to get workout {workout_id}") from e

        if not result.data:
            return None
        return db_row_to_document(result.data[0])

    def list_all(self) -> List[Dict[str, Any]]:
        """Get every workout, oldest first, ties broken by id."""
        try:
            result = (
                self._client.table(self._table)
                .select("*")
                .order("created_at")
                .order("id")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list workouts: {e}")
            raise WorkoutStoreError("Failed to list workouts") from e

        return [db_row_to_document(row) for row in result.data or []]

    def replace(
        self,
        workout_id: str,
        document: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Overwrite every column of an existing row."""
        if not _is_uuid(workout_id):
            return None
        row = document_to_db_row(document)
        try:
            result = (
                self._client.table(self._table)
                .update(row)
                .eq("id", workout_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update workout {workout_id}: {e}")
            _log_permission_hint(e)
            raise WorkoutStoreError(f"Failed to update workout {workout_id}") from e

        if not result.data:
            return None
        return db_row_to_document(result.data[0])

    def delete(self, workout_id: str) -> bool:
        """Delete a workout row."""
        if not _is_uuid(workout_id):
            return False
        try:
            result = (
                self._client.table(self._table)
                .delete()
                .eq("id", workout_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete workout {workout_id}: {e}")
            raise WorkoutStoreError(f"Failed to delete workout {workout_id}") from e

        return bool(result.data)


def _log_permission_hint(error: Exception) -> None:
    error_msg = str(error)
    if (
        "PGRST" in error_msg
        or "permission" in error_msg.lower()
        or "row-level security" in error_msg.lower()
    ):
        logger.error(
            "RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY "
            "instead of SUPABASE_ANON_KEY for backend API"
        )
