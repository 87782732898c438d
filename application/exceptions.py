"""
Application-layer exceptions.

These exceptions are used across the application and infrastructure layers.
Entity rule violations live in domain.exceptions.
"""


class WorkoutNotFoundError(Exception):
    """Raised when a referenced workout does not exist in the store."""

    def __init__(self, workout_id: str):
        super().__init__(f"Workout {workout_id} not found")
        self.workout_id = workout_id


class WorkoutStoreError(Exception):
    """Raised when the document store fails or is unreachable.

    The message may contain store internals; it is for logs only.
    """

    pass


class ConfigurationError(Exception):
    """Raised at startup when a required external dependency is not configured.

    The service must not start serving requests after this is raised.
    """

    pass
