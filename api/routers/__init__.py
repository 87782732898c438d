"""
Router package for the workout API.

- health: Liveness endpoint
- workouts: Workout CRUD
"""

from api.routers.health import router as health_router
from api.routers.workouts import router as workouts_router

__all__ = [
    "health_router",
    "workouts_router",
]
