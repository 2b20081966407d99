"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services free of SQL.
Each repository wraps the request's AsyncSession, so tests can run them
against any database SQLAlchemy supports (SQLite in the test suite).
"""

from repositories.exercise_repository import ExerciseRepository
from repositories.user_repository import UserRepository
from repositories.utils import log_slow_query

__all__ = [
    "ExerciseRepository",
    "UserRepository",
    "log_slow_query",
]
