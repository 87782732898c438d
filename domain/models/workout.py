"""
Workout entity - a single tagged type covering running and cycling.

The ``kind`` discriminant decides which conditional metric is required:
running workouts carry ``cadence``, cycling workouts carry ``elevation_gain``.
The rules live in ``validate_workout_fields`` and run for every validated
construction path (``Workout(...)``, ``Workout.from_payload``,
``construct_workout``). Reads of already-stored documents go through
``Workout.from_document`` which rehydrates without validation.

Examples:
    >>> from domain.models import construct_workout

    >>> workout = construct_workout(
    ...     kind="running",
    ...     distance=5,
    ...     duration=30,
    ...     coordinates={"latitude": 51.5, "longitude": -0.1},
    ...     cadence=180,
    ... )
    >>> workout.description  # doctest: +SKIP
    'Running on October 16'

    >>> workout.to_payload()["cadence"]
    180.0
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

from domain.exceptions import WorkoutValidationError


class WorkoutKind(str, Enum):
    """The two workout variants."""

    RUNNING = "running"
    CYCLING = "cycling"


# Python attribute names of every persisted field, in document order.
WORKOUT_FIELDS: Tuple[str, ...] = (
    "id",
    "kind",
    "distance",
    "duration",
    "coordinates",
    "cadence",
    "elevation_gain",
    "custom_metrics",
    "created_at",
)

# Both the wire (camelCase) and Python (snake_case) spelling resolve to the
# attribute name. Anything else is an unknown field.
_KEY_TO_FIELD: Dict[str, str] = {
    **{name: name for name in WORKOUT_FIELDS},
    **{to_camel(name): name for name in WORKOUT_FIELDS},
}

# Derived, never persisted; tolerated on input so a response can be fed back.
_DERIVED_KEYS = frozenset({"description"})

_METRIC_FIELD_BY_KIND: Dict[WorkoutKind, str] = {
    WorkoutKind.RUNNING: "cadence",
    WorkoutKind.CYCLING: "elevation_gain",
}


def wire_name(field_name: str) -> str:
    """Return the canonical wire name for a Python attribute name."""
    return to_camel(field_name)


def canonical_key(key: str) -> str:
    """
    Map a wire or Python field name to its canonical wire name.

    Unknown keys are returned unchanged so validation can name them.
    """
    name = _KEY_TO_FIELD.get(key)
    return wire_name(name) if name is not None else key


def required_metric_field(kind: "WorkoutKind | str") -> str:
    """
    Get the wire name of the metric a workout kind requires.

    Args:
        kind: Workout kind (enum or its string value).

    Returns:
        "cadence" for running, "elevationGain" for cycling.

    Raises:
        WorkoutValidationError: If kind is not a known variant.
    """
    return wire_name(_METRIC_FIELD_BY_KIND[_validate_kind(kind)])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Coordinates(BaseModel):
    """
    Value object for a geographic position.

    Examples:
        >>> Coordinates(latitude=51.5, longitude=-0.1).as_pair()
        (51.5, -0.1)
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")

    def as_pair(self) -> Tuple[float, float]:
        """Return (latitude, longitude), the order map widgets expect."""
        return (self.latitude, self.longitude)


# =============================================================================
# Field Rules
# =============================================================================


def _to_float(field: str, value: Any, label: Optional[str] = None) -> Optional[float]:
    """
    Coerce a raw value to a finite float.

    Returns None when the value is absent. Booleans are rejected even though
    they are ints.
    """
    label = label or "value"
    if value is None:
        return None
    if isinstance(value, bool):
        raise WorkoutValidationError(field, f"{label} must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise WorkoutValidationError(field, f"{label} must be a number") from None
    else:
        raise WorkoutValidationError(field, f"{label} must be a number")

    if not math.isfinite(number):
        raise WorkoutValidationError(field, f"{label} must be a finite number")
    return number


def _validate_coordinates(value: Any) -> Coordinates:
    if value is None:
        raise WorkoutValidationError("coordinates", "are required")
    if isinstance(value, Coordinates):
        value = {"latitude": value.latitude, "longitude": value.longitude}
    if not isinstance(value, Mapping):
        raise WorkoutValidationError(
            "coordinates", "must be an object with latitude and longitude"
        )

    bounds = {"latitude": 90.0, "longitude": 180.0}
    parsed: Dict[str, float] = {}
    for axis, bound in bounds.items():
        number = _to_float("coordinates", value.get(axis), label=axis)
        if number is None:
            raise WorkoutValidationError("coordinates", f"{axis} is required")
        if not -bound <= number <= bound:
            raise WorkoutValidationError(
                "coordinates", f"{axis} must be between -{bound:g} and {bound:g}"
            )
        parsed[axis] = number

    return Coordinates(**parsed)


def _validate_kind(value: Any) -> WorkoutKind:
    try:
        return WorkoutKind(value)
    except ValueError:
        allowed = ", ".join(k.value for k in WorkoutKind)
        raise WorkoutValidationError("kind", f"must be one of: {allowed}") from None


def _validate_positive(field: str, value: Any) -> float:
    number = _to_float(field, value)
    if number is None:
        raise WorkoutValidationError(field, "is required")
    if number <= 0:
        raise WorkoutValidationError(field, "must be greater than 0")
    return number


def _running_metrics(values: Mapping[str, Any]) -> Dict[str, Optional[float]]:
    cadence = _to_float("cadence", values.get("cadence"))
    if cadence is None:
        raise WorkoutValidationError("cadence", "is required for running workouts")
    if cadence <= 0:
        raise WorkoutValidationError("cadence", "must be greater than 0")
    if values.get("elevation_gain") is not None:
        raise WorkoutValidationError(
            "elevationGain", "is only allowed for cycling workouts"
        )
    return {"cadence": cadence, "elevation_gain": None}


def _cycling_metrics(values: Mapping[str, Any]) -> Dict[str, Optional[float]]:
    # Negative gain is a legitimate descent-heavy ride.
    elevation_gain = _to_float("elevationGain", values.get("elevation_gain"))
    if elevation_gain is None:
        raise WorkoutValidationError(
            "elevationGain", "is required for cycling workouts"
        )
    if values.get("cadence") is not None:
        raise WorkoutValidationError("cadence", "is only allowed for running workouts")
    return {"cadence": None, "elevation_gain": elevation_gain}


_VARIANT_RULES: Dict[
    WorkoutKind, Callable[[Mapping[str, Any]], Dict[str, Optional[float]]]
] = {
    WorkoutKind.RUNNING: _running_metrics,
    WorkoutKind.CYCLING: _cycling_metrics,
}


def _parse_timestamp(field: str, value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; values without an offset are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise WorkoutValidationError(
                field, "must be an ISO 8601 timestamp"
            ) from None
    if not isinstance(value, datetime):
        raise WorkoutValidationError(field, "must be an ISO 8601 timestamp")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_workout_fields(data: Any) -> Dict[str, Any]:
    """
    Apply the entity rules to raw field values.

    Coordinates are checked before anything else, then unknown keys, then
    ``kind`` and the common measures, then the metric rule for the kind.

    Args:
        data: Mapping keyed by wire or Python field names.

    Returns:
        Normalised values keyed by Python attribute name.

    Raises:
        WorkoutValidationError: Naming the first offending field.
    """
    if not isinstance(data, Mapping):
        raise WorkoutValidationError("workout", "must be an object")

    values: Dict[str, Any] = {}
    unknown = []
    for key, value in data.items():
        name = _KEY_TO_FIELD.get(key)
        if name is not None:
            values[name] = value
        elif key not in _DERIVED_KEYS:
            unknown.append(key)

    coordinates = _validate_coordinates(values.get("coordinates"))

    if unknown:
        raise WorkoutValidationError(unknown[0], "is not a recognised workout field")

    kind = _validate_kind(values.get("kind"))
    distance = _validate_positive("distance", values.get("distance"))
    duration = _validate_positive("duration", values.get("duration"))
    metrics = _VARIANT_RULES[kind](values)

    custom_metrics = values.get("custom_metrics")
    if custom_metrics is None:
        custom_metrics = {}
    elif not isinstance(custom_metrics, Mapping):
        raise WorkoutValidationError("customMetrics", "must be an object")

    workout_id = values.get("id")
    if workout_id is not None and not isinstance(workout_id, str):
        raise WorkoutValidationError("id", "must be a string")

    created_at = _parse_timestamp("createdAt", values.get("created_at")) or _utcnow()

    return {
        "id": workout_id,
        "kind": kind,
        "distance": distance,
        "duration": duration,
        "coordinates": coordinates,
        **metrics,
        "custom_metrics": dict(custom_metrics),
        "created_at": created_at,
    }


def describe(kind: WorkoutKind, created_at: datetime) -> str:
    """Build the display label, e.g. "Cycling on March 4"."""
    return f"{kind.value.capitalize()} on {created_at:%B} {created_at.day}"


# =============================================================================
# Entity
# =============================================================================


class Workout(BaseModel):
    """
    A geolocated running or cycling workout.

    Workouts are frozen: a change is a new document validated as a whole.
    Wire documents use camelCase names (``elevationGain``, ``customMetrics``,
    ``createdAt``); Python code uses the snake_case attributes.

    ``coordinates`` is typed Optional only because rehydrated documents may
    predate the requirement; validated construction always sets it.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: Optional[str] = Field(
        default=None,
        description="Store-assigned identifier. None for unsaved workouts.",
    )
    kind: WorkoutKind = Field(..., description="Workout variant")
    distance: float = Field(..., gt=0, description="Distance in kilometers")
    duration: float = Field(..., gt=0, description="Duration in minutes")
    coordinates: Optional[Coordinates] = Field(
        default=None, description="Where the workout took place"
    )
    cadence: Optional[float] = Field(
        default=None, description="Steps per minute (running only)"
    )
    elevation_gain: Optional[float] = Field(
        default=None, description="Elevation gain in meters (cycling only)"
    )
    custom_metrics: Dict[str, Any] = Field(
        default_factory=dict, description="Free-form additional metrics"
    )
    created_at: datetime = Field(
        default_factory=_utcnow, description="When the workout was recorded"
    )

    @model_validator(mode="before")
    @classmethod
    def _enforce_entity_rules(cls, data: Any) -> Any:
        return validate_workout_fields(data)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @computed_field
    @property
    def description(self) -> str:
        """Display label derived from kind and creation date."""
        return describe(self.kind, self.created_at)

    @property
    def is_new(self) -> bool:
        """Check if this workout has not been saved yet."""
        return self.id is None

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None

    # -------------------------------------------------------------------------
    # Construction and Serialization
    # -------------------------------------------------------------------------

    @classmethod
    def from_payload(cls, payload: Any) -> "Workout":
        """
        Validate a wire payload into a Workout.

        Raises:
            WorkoutValidationError: If any entity rule is violated.
        """
        return cls.model_validate(payload)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Workout":
        """
        Rehydrate a stored document without re-validating it.

        Missing coordinates come back as None.

        Raises:
            KeyError, TypeError, ValueError: If the document is malformed.
            WorkoutValidationError: If createdAt is not a timestamp.
        """
        if not isinstance(document, Mapping):
            raise TypeError(
                f"Workout document must be an object, got {type(document).__name__}"
            )
        values = {
            _KEY_TO_FIELD[key]: value
            for key, value in document.items()
            if key in _KEY_TO_FIELD
        }
        workout_id = values.get("id")
        created_at = _parse_timestamp("createdAt", values.get("created_at"))

        return cls.model_construct(
            id=str(workout_id) if workout_id is not None else None,
            kind=WorkoutKind(values["kind"]),
            distance=float(values["distance"]),
            duration=float(values["duration"]),
            coordinates=_rehydrate_coordinates(values.get("coordinates")),
            cadence=_optional_float(values.get("cadence")),
            elevation_gain=_optional_float(values.get("elevation_gain")),
            custom_metrics=dict(values.get("custom_metrics") or {}),
            created_at=created_at or _utcnow(),
        )

    def to_document(self) -> Dict[str, Any]:
        """Storage shape: canonical names, no derived fields, absent values dropped."""
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, exclude={"description"}
        )

    def to_response(self) -> Dict[str, Any]:
        """Wire shape returned by the API, including ``description``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_payload(self) -> Dict[str, Any]:
        """Creation request body: server-owned fields left out."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"id", "created_at", "description"},
        )

    def __str__(self) -> str:
        parts = [self.description, f"{self.distance:g} km", f"{self.duration:g} min"]
        if self.id:
            parts.append(f"id={self.id}")
        return f"Workout({', '.join(parts)})"


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _rehydrate_coordinates(value: Any) -> Optional[Coordinates]:
    if not isinstance(value, Mapping):
        return None
    latitude = value.get("latitude")
    longitude = value.get("longitude")
    if latitude is None or longitude is None:
        return None
    return Coordinates.model_construct(
        latitude=float(latitude), longitude=float(longitude)
    )


def construct_workout(
    kind: "WorkoutKind | str",
    distance: Any,
    duration: Any,
    coordinates: Any,
    cadence: Any = None,
    elevation_gain: Any = None,
    custom_metrics: Optional[Mapping[str, Any]] = None,
    created_at: Optional[datetime] = None,
) -> Workout:
    """
    Build a validated, unsaved Workout from raw field values.

    Raises:
        WorkoutValidationError: Naming the offending field.
    """
    return Workout(
        kind=kind,
        distance=distance,
        duration=duration,
        coordinates=coordinates,
        cadence=cadence,
        elevation_gain=elevation_gain,
        custom_metrics=custom_metrics,
        created_at=created_at,
    )
