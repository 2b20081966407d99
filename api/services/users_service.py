"""User directory service: register and list users."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core import get_logger, set_wide_event_fields
from core.errors import StoreError, UserNotFoundError
from models import User
from repositories.user_repository import UserRepository
from schemas import UserResponse

logger = get_logger(__name__)


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username)


async def register_user(db: AsyncSession, username: str) -> UserResponse:
    """Persist a new user. Usernames are not required to be unique."""
    user_repo = UserRepository(db)
    try:
        user = await user_repo.create(username)
    except SQLAlchemyError as e:
        raise StoreError("Failed to create user") from e

    logger.info("user.created", user_id=user.id, username=user.username)
    set_wide_event_fields(user_id=user.id)
    return _to_user_response(user)


async def list_users(db: AsyncSession) -> list[UserResponse]:
    """Return every user in the store's native order."""
    user_repo = UserRepository(db)
    try:
        users = await user_repo.list_all()
    except SQLAlchemyError as e:
        raise StoreError("Failed to fetch users") from e

    set_wide_event_fields(user_count=len(users))
    return [_to_user_response(user) for user in users]


async def get_user_or_raise(user_repo: UserRepository, user_id: str) -> User:
    """Fetch a user by id.

    Raises:
        UserNotFoundError: If no user has this id.
    """
    user = await user_repo.get_by_id(user_id)
    if user is None:
        logger.warning("user.not_found", user_id=user_id)
        raise UserNotFoundError(user_id)
    return user
