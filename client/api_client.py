"""
HTTP client for the workout API.

Used by the client state store and presentation layer. Responses are
returned as raw wire documents; turning them into Workout entities is the
caller's job.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)


class WorkoutClientError(Exception):
    """Base exception for workout client errors."""

    pass


class WorkoutApiUnavailable(WorkoutClientError):
    """Raised when the workout API cannot be reached or times out."""

    pass


class WorkoutApiError(WorkoutClientError):
    """Raised when the workout API answers with an error status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class WorkoutApiClient:
    """
    Async HTTP client for the /workouts endpoints.

    Each call opens its own httpx.AsyncClient, so an instance holds no
    connection state and can be shared freely.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the workout API client.

        Args:
            base_url: Base URL of the workout API (e.g., "http://localhost:8001")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def list_workouts(self) -> List[Dict[str, Any]]:
        """
        Fetch every workout document.

        Raises:
            WorkoutApiUnavailable: If the API is not reachable
            WorkoutApiError: If the API returns an error response
        """
        data = await self._request("GET", "/workouts", expected=200)
        if not isinstance(data, list):
            raise WorkoutApiError("Expected a list of workouts", 200)
        return data

    async def get_workout(self, workout_id: str) -> Dict[str, Any]:
        """Fetch a single workout document."""
        return await self._request("GET", f"/workouts/{workout_id}", expected=200)

    async def create_workout(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a workout.

        Args:
            payload: Creation body (see Workout.to_payload)

        Returns:
            The stored workout document, including its id
        """
        return await self._request("POST", "/workouts", expected=201, json=dict(payload))

    async def update_workout(
        self,
        workout_id: str,
        changes: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """Apply a partial update and return the stored document."""
        return await self._request(
            "PATCH", f"/workouts/{workout_id}", expected=200, json=dict(changes)
        )

    async def delete_workout(self, workout_id: str) -> None:
        """Delete a workout."""
        await self._request("DELETE", f"/workouts/{workout_id}", expected=200)

    async def _request(
        self,
        method: str,
        path: str,
        expected: int,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"Workout API timeout: {e}")
            raise WorkoutApiUnavailable("Workout API request timed out") from e
        except httpx.TransportError as e:
            logger.error(f"Workout API unavailable: {e}")
            raise WorkoutApiUnavailable(
                f"Workout API is not available at {self._base_url}"
            ) from e

        if response.status_code != expected:
            logger.error(
                f"Workout API error: {method} {path} -> "
                f"{response.status_code} - {response.text}"
            )
            raise WorkoutApiError(
                _error_message(response), response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise WorkoutApiError(
                "Workout API returned invalid JSON", response.status_code
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Pull ``error`` out of an error body, falling back to the raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text
