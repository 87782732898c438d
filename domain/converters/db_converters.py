"""
Converters: workout document <-> Supabase database row.

Documents use the canonical wire names with nested coordinates. The
``workouts`` table flattens coordinates and uses snake_case columns:

- id: UUID (generated by the database)
- kind: text ('running' | 'cycling')
- distance, duration: float8
- latitude, longitude: float8
- cadence: float8, NULL unless kind = 'running'
- elevation_gain: float8, NULL unless kind = 'cycling'
- custom_metrics: JSONB
- created_at: timestamptz
"""

from typing import Any, Dict, Optional


def document_to_db_row(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a workout document to a database row.

    Every column is written explicitly so that a full replace clears a
    metric left over from a previous kind.

    Args:
        document: Workout document (canonical wire names).

    Returns:
        Row dictionary for the workouts table. ``id`` is omitted.

    Examples:
        >>> document_to_db_row({
        ...     "kind": "running",
        ...     "distance": 5.0,
        ...     "duration": 30.0,
        ...     "coordinates": {"latitude": 51.5, "longitude": -0.1},
        ...     "cadence": 180.0,
        ...     "customMetrics": {},
        ...     "createdAt": "2026-04-14T08:00:00Z",
        ... })["latitude"]
        51.5
    """
    coordinates = document.get("coordinates") or {}
    return {
        "kind": document.get("kind"),
        "distance": document.get("distance"),
        "duration": document.get("duration"),
        "latitude": coordinates.get("latitude"),
        "longitude": coordinates.get("longitude"),
        "cadence": document.get("cadence"),
        "elevation_gain": document.get("elevationGain"),
        "custom_metrics": document.get("customMetrics") or {},
        "created_at": document.get("createdAt"),
    }


def db_row_to_document(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a database row back to a workout document.

    Absent metrics are left out rather than set to None, matching the
    entity's own document shape.

    Args:
        row: Dictionary representing a row of the workouts table.

    Returns:
        Workout document with nested coordinates.
    """
    document: Dict[str, Any] = {
        "id": str(row["id"]),
        "kind": row.get("kind"),
        "distance": row.get("distance"),
        "duration": row.get("duration"),
        "customMetrics": row.get("custom_metrics") or {},
        "createdAt": row.get("created_at"),
    }

    coordinates = _coordinates_from_row(row)
    if coordinates is not None:
        document["coordinates"] = coordinates
    if row.get("cadence") is not None:
        document["cadence"] = row["cadence"]
    if row.get("elevation_gain") is not None:
        document["elevationGain"] = row["elevation_gain"]

    return document


def _coordinates_from_row(row: Dict[str, Any]) -> Optional[Dict[str, float]]:
    latitude = row.get("latitude")
    longitude = row.get("longitude")
    if latitude is None or longitude is None:
        return None
    return {"latitude": latitude, "longitude": longitude}
