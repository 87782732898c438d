"""
FastAPI Dependency Providers for the workout API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and gateway providers create new instances per-request

Usage in routers:
    from api.deps import get_workout_gateway
    from application.use_cases import WorkoutGateway

    @router.get("/workouts")
    def list_workouts(gateway: WorkoutGateway = Depends(get_workout_gateway)):
        return [w.to_response() for w in gateway.list()]

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_workout_repo] = lambda: FakeWorkoutRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException
from supabase import Client, create_client

from application.ports import WorkoutRepository
from application.use_cases import WorkoutGateway
from backend.settings import Settings, get_settings as _get_settings
from infrastructure import SupabaseWorkoutRepository


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.is_database_configured:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> WorkoutRepository:
    """
    Get WorkoutRepository implementation.

    Returns a SupabaseWorkoutRepository instance with injected client.
    The return type is the Protocol to enable easy faking.
    """
    return SupabaseWorkoutRepository(client, table=settings.workouts_table)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_workout_gateway(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> WorkoutGateway:
    """
    Get WorkoutGateway with its repository injected.

    Override get_workout_repo in tests to run the real gateway on a fake store.
    """
    return WorkoutGateway(workout_repo=workout_repo)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_workout_repo",
    # Use cases
    "get_workout_gateway",
]
