"""
Domain models for the workout map service.

- Workout: tagged running/cycling entity with its construction rules
- Coordinates: latitude/longitude value object
- WorkoutKind: the two variants

Usage:
    >>> from domain.models import construct_workout

    >>> ride = construct_workout(
    ...     kind="cycling",
    ...     distance=42.0,
    ...     duration=95,
    ...     coordinates={"latitude": 46.2, "longitude": 6.1},
    ...     elevation_gain=-50,
    ... )

    >>> # Wire shape (camelCase, includes description)
    >>> body = ride.to_response()
"""

from domain.models.workout import (
    Coordinates,
    Workout,
    WorkoutKind,
    WORKOUT_FIELDS,
    canonical_key,
    construct_workout,
    describe,
    required_metric_field,
    validate_workout_fields,
    wire_name,
)

__all__ = [
    # Main entity
    "Workout",
    "Coordinates",
    # Enums
    "WorkoutKind",
    # Construction helpers
    "construct_workout",
    "validate_workout_fields",
    "required_metric_field",
    "describe",
    "wire_name",
    "canonical_key",
    "WORKOUT_FIELDS",
]
