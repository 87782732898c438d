"""
Application Use Cases for the workout service.

Use cases orchestrate domain objects and repository ports. Dependencies
are injected via constructors for testability, and use cases return
domain models, not API responses.

Usage:
    from application.use_cases import WorkoutGateway

    gateway = WorkoutGateway(workout_repo=workout_repo)
    workouts = gateway.list()
"""

from application.use_cases.workout_gateway import WorkoutGateway

__all__ = [
    "WorkoutGateway",
]
