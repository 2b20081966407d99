"""Exercise log service: append entries and query a user's log."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core import get_logger, set_wide_event_fields
from core.errors import StoreError
from repositories.exercise_repository import ExerciseRepository
from repositories.user_repository import UserRepository
from schemas import ExerciseLogResponse, ExerciseResponse, LogEntryResponse
from services.exercise_log import (
    build_date_range,
    coerce_duration,
    parse_limit,
    render_date,
    resolve_entry_date,
    shape_entries,
)
from services.users_service import get_user_or_raise

logger = get_logger(__name__)


async def add_exercise(
    db: AsyncSession,
    user_id: str,
    *,
    description: str,
    duration: object,
    date: str | None = None,
) -> ExerciseResponse:
    """Append an exercise entry for a user.

    Input is coerced and the user is looked up before anything is written,
    so a missing user or a bad field never leaves an orphaned entry.

    Raises:
        ValidationError: If duration or date cannot be coerced.
        UserNotFoundError: If the user does not exist.
        StoreError: If the store read or write fails.
    """
    exercise_duration = coerce_duration(duration)
    exercise_date = resolve_entry_date(date)

    user_repo = UserRepository(db)
    exercise_repo = ExerciseRepository(db)
    try:
        user = await get_user_or_raise(user_repo, user_id)
        exercise = await exercise_repo.create(
            user.id,
            description=description,
            duration=exercise_duration,
            exercise_date=exercise_date,
        )
    except SQLAlchemyError as e:
        raise StoreError("Failed to add exercise") from e

    logger.info(
        "exercise.added",
        user_id=user.id,
        exercise_id=exercise.id,
        duration=exercise.duration,
        date=exercise.date.isoformat(),
    )
    set_wide_event_fields(user_id=user.id, exercise_id=exercise.id)

    return ExerciseResponse(
        id=user.id,
        username=user.username,
        description=exercise.description,
        duration=exercise.duration,
        date=render_date(exercise.date),
    )


async def get_exercise_log(
    db: AsyncSession,
    user_id: str,
    *,
    start: str | None = None,
    end: str | None = None,
    limit: str | int | None = None,
) -> ExerciseLogResponse:
    """Return a user's exercise log, oldest entry first.

    ``start`` and ``end`` are inclusive calendar-date bounds. ``limit`` keeps
    the first N entries after filtering; absent or non-positive means all.
    The user is looked up first, so an unknown user is reported as such even
    when the query parameters are also invalid.

    Raises:
        ValidationError: If a bound or the limit cannot be parsed.
        UserNotFoundError: If the user does not exist.
        StoreError: If a store read fails.
    """
    user_repo = UserRepository(db)
    exercise_repo = ExerciseRepository(db)
    try:
        user = await get_user_or_raise(user_repo, user_id)
    except SQLAlchemyError as e:
        raise StoreError("Failed to fetch exercise logs") from e

    date_range = build_date_range(start, end)
    max_entries = parse_limit(limit)

    try:
        exercises = await exercise_repo.get_by_user(
            user.id,
            start_date=date_range.start,
            end_date=date_range.end,
            limit=max_entries,
        )
    except SQLAlchemyError as e:
        raise StoreError("Failed to fetch exercise logs") from e

    log = shape_entries(exercises)

    logger.info(
        "exercise.log.fetched",
        user_id=user.id,
        count=len(log),
        date_filtered=date_range.is_bounded,
        limit=max_entries,
    )
    set_wide_event_fields(user_id=user.id, log_count=len(log))

    return ExerciseLogResponse(
        id=user.id,
        username=user.username,
        count=len(log),
        log=[LogEntryResponse.model_validate(entry) for entry in log],
    )
