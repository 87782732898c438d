"""
Workouts router for workout CRUD.

This router contains endpoints for:
- /workouts - List all workouts, create a workout
- /workouts/{workout_id} - Get, update, delete a workout

Every failure is answered with ``{"error": <message>}``; validation failures
add the offending ``field``. Internal error text is logged, never returned.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from api.deps import get_workout_gateway
from application.exceptions import WorkoutNotFoundError
from application.use_cases import WorkoutGateway
from domain.exceptions import WorkoutValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)

NOT_FOUND_MESSAGE = "Workout not found."


def _validation_error(e: WorkoutValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail={"error": e.message, "field": e.field})


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)


# =============================================================================
# Workout CRUD Endpoints
# =============================================================================


@router.get("")
def list_workouts(
    gateway: WorkoutGateway = Depends(get_workout_gateway),
) -> List[Dict[str, Any]]:
    """List every workout, oldest first."""
    try:
        return [workout.to_response() for workout in gateway.list()]
    except Exception as e:
        logger.error(f"Failed to list workouts: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch workouts.")


@router.get("/{workout_id}")
def get_workout(
    workout_id: str,
    gateway: WorkoutGateway = Depends(get_workout_gateway),
) -> Dict[str, Any]:
    """Get a single workout by ID."""
    try:
        return gateway.get_by_id(workout_id).to_response()
    except WorkoutNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Failed to get workout {workout_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch the workout.")


@router.post("", status_code=201)
def create_workout(
    payload: Dict[str, Any] = Body(...),
    gateway: WorkoutGateway = Depends(get_workout_gateway),
) -> Dict[str, Any]:
    """
    Create a workout.

    The body carries kind, distance, duration and coordinates, plus cadence
    for running or elevationGain for cycling, and optional customMetrics.
    """
    try:
        return gateway.create(payload).to_response()
    except WorkoutValidationError as e:
        raise _validation_error(e)
    except Exception as e:
        logger.error(f"Failed to create workout: {e}")
        raise HTTPException(status_code=400, detail="Failed to create workout.")


@router.patch("/{workout_id}")
def update_workout(
    workout_id: str,
    payload: Dict[str, Any] = Body(...),
    gateway: WorkoutGateway = Depends(get_workout_gateway),
) -> Dict[str, Any]:
    """Apply a partial update; the merged workout is validated as a whole."""
    try:
        return gateway.update(workout_id, payload).to_response()
    except WorkoutValidationError as e:
        raise _validation_error(e)
    except WorkoutNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Failed to update workout {workout_id}: {e}")
        raise HTTPException(status_code=400, detail="Workout not updated.")


@router.delete("/{workout_id}")
def delete_workout(
    workout_id: str,
    gateway: WorkoutGateway = Depends(get_workout_gateway),
) -> Dict[str, str]:
    """Delete a workout."""
    try:
        gateway.delete(workout_id)
    except WorkoutNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Failed to delete workout {workout_id}: {e}")
        raise HTTPException(status_code=500, detail="Workout not deleted.")

    return {"message": "Workout deleted successfully."}
