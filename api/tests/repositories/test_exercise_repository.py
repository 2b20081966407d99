"""Tests for ExerciseRepository.

Tests appending entries and the filtered, ordered log query.
"""

from datetime import UTC, date, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models import User
from repositories.exercise_repository import ExerciseRepository
from tests.factories import ExerciseFactory, UserFactory, create_async


async def _add_on(db: AsyncSession, user: User, *days: date) -> None:
    for day in days:
        await create_async(ExerciseFactory, db, user_id=user.id, date=day)


@pytest.mark.integration
class TestExerciseRepositoryCreate:
    """Tests for ExerciseRepository.create()."""

    async def test_persists_entry(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        repo = ExerciseRepository(db_session)

        exercise = await repo.create(
            user.id,
            description="run",
            duration=30,
            exercise_date=date(2023, 3, 5),
        )

        assert len(exercise.id) == 32
        assert exercise.user_id == user.id
        assert exercise.description == "run"
        assert exercise.duration == 30
        assert exercise.date == date(2023, 3, 5)

        stored = await repo.get_by_user(user.id)
        assert [e.id for e in stored] == [exercise.id]


@pytest.mark.integration
class TestExerciseRepositoryGetByUser:
    """Tests for ExerciseRepository.get_by_user()."""

    async def test_returns_empty_for_user_without_entries(
        self, db_session: AsyncSession
    ):
        user = await create_async(UserFactory, db_session)
        repo = ExerciseRepository(db_session)

        assert list(await repo.get_by_user(user.id)) == []

    async def test_orders_by_date_ascending(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        await _add_on(
            db_session, user, date(2022, 5, 3), date(2022, 5, 1), date(2022, 5, 2)
        )
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(user.id)

        assert [e.date for e in result] == [
            date(2022, 5, 1),
            date(2022, 5, 2),
            date(2022, 5, 3),
        ]

    async def test_same_day_ordered_by_insertion(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        base = datetime(2022, 5, 1, 8, 0, tzinfo=UTC)
        for offset, description in enumerate(["first", "second", "third"]):
            await create_async(
                ExerciseFactory,
                db_session,
                user_id=user.id,
                description=description,
                date=date(2022, 5, 1),
                created_at=base + timedelta(minutes=offset),
            )
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(user.id)

        assert [e.description for e in result] == ["first", "second", "third"]

    async def test_bounds_are_inclusive(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        await _add_on(
            db_session,
            user,
            date(2019, 12, 31),
            date(2020, 1, 1),
            date(2020, 1, 31),
            date(2020, 2, 1),
        )
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(
            user.id, start_date=date(2020, 1, 1), end_date=date(2020, 1, 31)
        )

        assert [e.date for e in result] == [date(2020, 1, 1), date(2020, 1, 31)]

    async def test_start_only(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        await _add_on(db_session, user, date(2020, 1, 1), date(2020, 6, 1))
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(user.id, start_date=date(2020, 3, 1))

        assert [e.date for e in result] == [date(2020, 6, 1)]

    async def test_end_only(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        await _add_on(db_session, user, date(2020, 1, 1), date(2020, 6, 1))
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(user.id, end_date=date(2020, 3, 1))

        assert [e.date for e in result] == [date(2020, 1, 1)]

    async def test_limit_applies_after_filter(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        await _add_on(
            db_session,
            user,
            date(2019, 1, 1),
            date(2020, 1, 2),
            date(2020, 1, 3),
            date(2020, 1, 4),
        )
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(
            user.id, start_date=date(2020, 1, 1), limit=2
        )

        assert [e.date for e in result] == [date(2020, 1, 2), date(2020, 1, 3)]

    async def test_none_limit_returns_all(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        await _add_on(db_session, user, date(2020, 1, 1), date(2020, 1, 2))
        repo = ExerciseRepository(db_session)

        assert len(await repo.get_by_user(user.id, limit=None)) == 2

    async def test_scoped_to_user(self, db_session: AsyncSession):
        user = await create_async(UserFactory, db_session)
        other = await create_async(UserFactory, db_session)
        await _add_on(db_session, user, date(2020, 1, 1))
        await _add_on(db_session, other, date(2020, 1, 1), date(2020, 1, 2))
        repo = ExerciseRepository(db_session)

        result = await repo.get_by_user(user.id)

        assert [e.user_id for e in result] == [user.id]
