"""
Unit tests for WorkoutApiClient.

Requests are answered by an httpx.MockTransport, so the real httpx
request/response path is exercised without a server.
"""

import json

import httpx
import pytest

from client.api_client import (
    WorkoutApiClient,
    WorkoutApiError,
    WorkoutApiUnavailable,
    WorkoutClientError,
)
from tests.fakes import running_document


def make_client(handler) -> WorkoutApiClient:
    return WorkoutApiClient(
        base_url="http://workout-api:8001/",
        transport=httpx.MockTransport(handler),
    )


# ---------------------------------------------------------------------------
# Successful calls
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestWorkoutApiClientSuccess:
    """Happy paths for every endpoint."""

    @pytest.mark.asyncio
    async def test_list_workouts(self):
        documents = [running_document()]
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, str(request.url)))
            return httpx.Response(200, json=documents)

        result = await make_client(handler).list_workouts()

        assert result == documents
        assert seen == [("GET", "http://workout-api:8001/workouts")]

    @pytest.mark.asyncio
    async def test_get_workout(self):
        document = running_document(id="w1")

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/workouts/w1"
            return httpx.Response(200, json=document)

        assert await make_client(handler).get_workout("w1") == document

    @pytest.mark.asyncio
    async def test_create_workout_sends_json(self):
        payload = {"kind": "running", "distance": 5.0}

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert json.loads(request.content) == payload
            return httpx.Response(201, json={**payload, "id": "w1"})

        created = await make_client(handler).create_workout(payload)

        assert created["id"] == "w1"

    @pytest.mark.asyncio
    async def test_update_workout_uses_patch(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PATCH"
            assert request.url.path == "/workouts/w1"
            return httpx.Response(200, json={"id": "w1", "distance": 8.0})

        updated = await make_client(handler).update_workout("w1", {"distance": 8})

        assert updated["distance"] == 8.0

    @pytest.mark.asyncio
    async def test_delete_workout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            return httpx.Response(200, json={"message": "Workout deleted successfully."})

        assert await make_client(handler).delete_workout("w1") is None


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestWorkoutApiClientErrors:
    """Transport and HTTP failures become client exceptions."""

    @pytest.mark.asyncio
    async def test_error_status_raises_api_error_with_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"error": "cadence is required for running workouts", "field": "cadence"}
            )

        with pytest.raises(WorkoutApiError) as exc_info:
            await make_client(handler).create_workout({"kind": "running"})

        assert exc_info.value.status_code == 400
        assert "cadence" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "Workout not found."})

        with pytest.raises(WorkoutApiError) as exc_info:
            await make_client(handler).get_workout("missing")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(WorkoutApiError) as exc_info:
            await make_client(handler).list_workouts()

        assert str(exc_info.value) == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_connect_error_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(WorkoutApiUnavailable):
            await make_client(handler).list_workouts()

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(WorkoutApiUnavailable) as exc_info:
            await make_client(handler).list_workouts()

        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_list_must_be_array(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"workouts": []})

        with pytest.raises(WorkoutApiError):
            await make_client(handler).list_workouts()

    @pytest.mark.asyncio
    async def test_invalid_json_success_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        with pytest.raises(WorkoutClientError):
            await make_client(handler).get_workout("w1")

    def test_errors_share_base_class(self):
        assert issubclass(WorkoutApiUnavailable, WorkoutClientError)
        assert issubclass(WorkoutApiError, WorkoutClientError)
