"""Repository for exercise log operations."""

from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Exercise
from repositories.utils import log_slow_query


class ExerciseRepository:
    """Repository for append-only exercise entries."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @log_slow_query("create_exercise")
    async def create(
        self,
        user_id: str,
        *,
        description: str,
        duration: int,
        exercise_date: date,
    ) -> Exercise:
        """Append a new exercise entry for a user."""
        exercise = Exercise(
            user_id=user_id,
            description=description,
            duration=duration,
            date=exercise_date,
        )
        self.db.add(exercise)
        await self.db.flush()
        return exercise

    @log_slow_query("get_exercises_by_user")
    async def get_by_user(
        self,
        user_id: str,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ) -> Sequence[Exercise]:
        """Get a user's exercises, oldest first.

        Args:
            user_id: The user's ID
            start_date: Inclusive lower bound on the exercise date
            end_date: Inclusive upper bound on the exercise date
            limit: Maximum number of exercises to return (None for all)

        Ties on date are broken by insertion time so ``limit`` always
        keeps the same entries.
        """
        query = (
            select(Exercise)
            .where(Exercise.user_id == user_id)
            .order_by(Exercise.date.asc(), Exercise.created_at.asc(), Exercise.id.asc())
        )
        if start_date is not None:
            query = query.where(Exercise.date >= start_date)
        if end_date is not None:
            query = query.where(Exercise.date <= end_date)
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return result.scalars().all()
