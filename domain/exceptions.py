"""
Domain-level exceptions.

Raised by entity construction and surfaced unchanged through the gateway.
The API layer is the only place they are turned into status codes.
"""


class WorkoutValidationError(Exception):
    """Raised when workout fields violate an entity rule.

    Must not subclass ValueError: pydantic wraps ValueError raised inside
    validators into its own ValidationError.

    Attributes:
        field: Canonical (wire) name of the offending field, e.g. "coordinates".
        reason: Human-readable explanation.
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field} {reason}")
        self.field = field
        self.reason = reason

    @property
    def message(self) -> str:
        return str(self)
