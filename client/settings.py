"""
Client settings loaded from ``WORKOUT_CLIENT_*`` environment variables.

Usage:
    from client.settings import get_client_settings

    settings = get_client_settings()
    api = WorkoutApiClient(settings.api_url, timeout=settings.timeout_seconds)
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.models import Coordinates


class ClientSettings(BaseSettings):
    """Settings for the map client."""

    model_config = SettingsConfigDict(
        env_prefix="WORKOUT_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(
        default="http://localhost:8001",
        description="Base URL of the workout API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout",
    )
    map_zoom: int = Field(
        default=13,
        ge=0,
        le=19,
        description="Zoom level used when centering the map",
    )
    default_latitude: float = Field(
        default=51.5074,
        ge=-90,
        le=90,
        description="Latitude reported when no live position is available",
    )
    default_longitude: float = Field(
        default=-0.1278,
        ge=-180,
        le=180,
        description="Longitude reported when no live position is available",
    )

    @property
    def default_position(self) -> Coordinates:
        return Coordinates(
            latitude=self.default_latitude, longitude=self.default_longitude
        )


@lru_cache
def get_client_settings() -> ClientSettings:
    """
    Get cached client settings.

    For testing, clear the cache with get_client_settings.cache_clear().
    """
    return ClientSettings()
