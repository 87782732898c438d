"""
Domain layer for the workout map service.

This package contains the workout entity and its rules, independent of
infrastructure concerns (database, API, map rendering).
"""

from domain.exceptions import WorkoutValidationError
from domain.models import (
    Coordinates,
    Workout,
    WorkoutKind,
    construct_workout,
)

__all__ = [
    "Coordinates",
    "Workout",
    "WorkoutKind",
    "WorkoutValidationError",
    "construct_workout",
]
