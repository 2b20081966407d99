"""User repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import User
from repositories.utils import log_slow_query


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("get_user_by_id")
    async def get_by_id(self, user_id: str) -> User | None:
        """Get a user by their ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @log_slow_query("list_users")
    async def list_all(self) -> Sequence[User]:
        """Get every user, in the store's native order."""
        result = await self.db.execute(select(User))
        return result.scalars().all()

    @log_slow_query("create_user")
    async def create(self, username: str) -> User:
        """Create a new user. The id is generated on flush."""
        user = User(username=username)
        self.db.add(user)
        await self.db.flush()
        return user
