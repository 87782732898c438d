"""
Infrastructure Layer for the workout service.

Concrete implementations of the application ports:
- db/: Supabase database implementations
"""

from infrastructure.db import SupabaseWorkoutRepository

__all__ = [
    "SupabaseWorkoutRepository",
]
