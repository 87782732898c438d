"""
View models for the workout list and map popups.

Examples:
    >>> from domain.models import construct_workout
    >>> workout = construct_workout(
    ...     kind="cycling",
    ...     distance=27,
    ...     duration=95,
    ...     coordinates={"latitude": 46.1, "longitude": 7.3},
    ...     elevation_gain=523,
    ... )
    >>> row = WorkoutRow.from_workout(workout)
    >>> row.css_class
    'workout workout--cycling'
    >>> [d.text for d in row.details]
    ['27 km', '95 min', '523 m']
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from domain.models import Workout, WorkoutKind

MISSING_VALUE = "-"

KIND_ICONS = {
    WorkoutKind.RUNNING: "🏃‍♂️",
    WorkoutKind.CYCLING: "🚴‍♀️",
}


@dataclass(frozen=True)
class RowDetail:
    """One icon/value/unit cell of a list row."""

    icon: str
    value: str
    unit: str

    @property
    def text(self) -> str:
        if self.value == MISSING_VALUE:
            return MISSING_VALUE
        return f"{self.value} {self.unit}"


@dataclass(frozen=True)
class WorkoutRow:
    """A list entry for one workout."""

    workout_id: Optional[str]
    kind: WorkoutKind
    title: str
    details: Tuple[RowDetail, ...]

    @property
    def css_class(self) -> str:
        return f"workout workout--{self.kind.value}"

    @classmethod
    def from_workout(cls, workout: Workout) -> "WorkoutRow":
        details = [
            RowDetail(KIND_ICONS[workout.kind], format_number(workout.distance), "km"),
            RowDetail("⏱", format_number(workout.duration), "min"),
        ]
        if workout.kind is WorkoutKind.RUNNING:
            details.append(RowDetail("🦶🏼", format_number(workout.cadence), "spm"))
        else:
            details.append(RowDetail("⛰", format_number(workout.elevation_gain), "m"))

        return cls(
            workout_id=workout.id,
            kind=workout.kind,
            title=workout.description,
            details=tuple(details),
        )


def format_number(value: Optional[float]) -> str:
    """Render a measure with at most two decimals; None becomes "-"."""
    if value is None:
        return MISSING_VALUE
    return f"{value:.2f}".rstrip("0").rstrip(".")


def popup_content(workout: Workout) -> str:
    """Popup text, e.g. "🏃‍♂️ Running on April 14"."""
    return f"{KIND_ICONS[workout.kind]} {workout.description}"


def popup_class(workout: Workout) -> str:
    return f"{workout.kind.value}-popup"


def newest_first(workouts: Iterable[Workout]) -> List[Workout]:
    """
    Order workouts with the most recent on top.

    Workouts sharing a timestamp come out in reverse incoming order, so the
    last one added is still shown first.
    """
    ordered = list(workouts)
    ordered.reverse()
    ordered.sort(key=lambda w: w.created_at, reverse=True)
    return ordered
