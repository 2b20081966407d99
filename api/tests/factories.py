"""Factory Boy factories for generating test data.

Factories provide a clean way to create test objects with sensible defaults.
Override specific fields as needed in tests.

Usage:
    # Create a user
    user = UserFactory.build()  # In-memory only
    user = await create_async(UserFactory, db_session)  # Persisted

    # Override fields
    exercise = ExerciseFactory.build(user_id=user.id, duration=30)
"""

from datetime import UTC, datetime

import factory
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from models import Exercise, User, new_id

fake = Faker()


# =============================================================================
# Async Factory Helpers
# =============================================================================


async def create_async(
    factory_class: type[factory.Factory], db: AsyncSession, **kwargs
):
    """Create an instance using a factory and persist to database.

    Usage:
        user = await create_async(UserFactory, db_session, username="alice")
    """
    instance = factory_class.build(**kwargs)
    db.add(instance)
    await db.flush()
    await db.refresh(instance)
    return instance


async def create_batch_async(
    factory_class: type[factory.Factory], db: AsyncSession, size: int, **kwargs
):
    """Create multiple instances and persist to database."""
    instances = factory_class.build_batch(size, **kwargs)
    for instance in instances:
        db.add(instance)
    await db.flush()
    for instance in instances:
        await db.refresh(instance)
    return instances


# =============================================================================
# User Factory
# =============================================================================


class UserFactory(factory.Factory):
    """Factory for creating User instances."""

    class Meta:
        model = User

    id = factory.LazyFunction(new_id)
    username = factory.LazyAttribute(lambda _: fake.user_name())
    created_at = factory.LazyFunction(lambda: datetime.now(UTC))


# =============================================================================
# Exercise Factory
# =============================================================================


class ExerciseFactory(factory.Factory):
    """Factory for creating Exercise instances.

    Pass ``user_id`` explicitly when persisting.
    """

    class Meta:
        model = Exercise

    id = factory.LazyFunction(new_id)
    user_id = factory.LazyFunction(new_id)
    description = factory.LazyAttribute(
        lambda _: fake.random_element(["run", "swim", "cycle", "row", "lift"])
    )
    duration = factory.LazyAttribute(lambda _: fake.random_int(5, 120))
    date = factory.LazyAttribute(
        lambda _: fake.date_between(start_date="-1y", end_date="today")
    )
    created_at = factory.LazyFunction(lambda: datetime.now(UTC))
