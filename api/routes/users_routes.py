"""User directory and exercise log endpoints."""

from typing import Annotated, Any, TypeVar

import pydantic
from fastapi import APIRouter, Path, Query, Request

from core.database import DbSession
from core.errors import ValidationError
from schemas import (
    ErrorResponse,
    ExerciseCreateRequest,
    ExerciseLogResponse,
    ExerciseResponse,
    UserCreateRequest,
    UserResponse,
)
from services.exercises_service import add_exercise, get_exercise_log
from services.users_service import list_users, register_user

router = APIRouter(prefix="/api/users", tags=["users"])

UserIdPath = Annotated[str, Path(min_length=1, max_length=64)]

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}
_USER_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    **_ERROR_RESPONSES,
    404: {"model": ErrorResponse, "description": "User not found"},
}


async def _read_payload(request: Request) -> dict[str, Any]:
    """Read a JSON object or form body into a plain dict.

    HTML forms on the landing page post urlencoded data; API clients post
    JSON. Both are accepted on every write endpoint.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError("Malformed JSON body") from None
        if not isinstance(payload, dict):
            raise ValidationError("JSON body must be an object")
        return payload

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


M = TypeVar("M", bound=pydantic.BaseModel)


def _validate(model: type[M], payload: dict[str, Any]) -> M:
    """Validate a payload, converting the first pydantic error to ours."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            raise ValidationError(f"{field} is required", field=field) from None
        message = error["msg"].removeprefix("Value error, ")
        raise ValidationError(message, field=field or None) from None


@router.post("", response_model=UserResponse, responses=_ERROR_RESPONSES)
async def create_user_endpoint(request: Request, db: DbSession) -> UserResponse:
    """Register a new user. Accepts ``username`` as form data or JSON."""
    body = _validate(UserCreateRequest, await _read_payload(request))
    return await register_user(db, body.username)


@router.get("", response_model=list[UserResponse], responses=_ERROR_RESPONSES)
async def list_users_endpoint(db: DbSession) -> list[UserResponse]:
    """List every registered user."""
    return await list_users(db)


@router.post(
    "/{user_id}/exercises",
    response_model=ExerciseResponse,
    responses=_USER_ERROR_RESPONSES,
)
async def add_exercise_endpoint(
    request: Request,
    user_id: UserIdPath,
    db: DbSession,
) -> ExerciseResponse:
    """Append an exercise for a user.

    Body fields: ``description``, ``duration`` and optional ``date``
    (``YYYY-MM-DD``; defaults to today).
    """
    body = _validate(ExerciseCreateRequest, await _read_payload(request))
    return await add_exercise(
        db,
        user_id,
        description=body.description,
        duration=body.duration,
        date=body.date,
    )


@router.get(
    "/{user_id}/logs",
    response_model=ExerciseLogResponse,
    responses=_USER_ERROR_RESPONSES,
)
async def get_exercise_log_endpoint(
    user_id: UserIdPath,
    db: DbSession,
    start: Annotated[str | None, Query(alias="from")] = None,
    end: Annotated[str | None, Query(alias="to")] = None,
    limit: Annotated[str | None, Query()] = None,
) -> ExerciseLogResponse:
    """Get a user's exercise log.

    ``from``/``to`` are inclusive ``YYYY-MM-DD`` bounds. ``limit`` keeps
    the first N entries, oldest first.
    """
    return await get_exercise_log(db, user_id, start=start, end=end, limit=limit)
