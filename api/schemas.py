"""Pydantic schemas for API request/response validation.

Response models expose record ids as ``_id``. Pydantic does not allow field
names with a leading underscore, so the fields are named ``id`` and
aliased; ``populate_by_name`` lets services build them with ``id=...``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreateRequest(BaseModel):
    """Request to register a user (form or JSON body)."""

    username: str = Field(max_length=255)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username is required")
        return v


class UserResponse(BaseModel):
    """A user as returned by the directory endpoints."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    username: str
    id: str = Field(alias="_id")


class ExerciseCreateRequest(BaseModel):
    """Request to append an exercise entry.

    ``duration`` is left untyped here; the service coerces it so form posts
    like ``duration=30``, JSON numbers, and JSON ``null`` or ``true`` all go
    through the same checks.
    """

    description: str
    duration: Any = None
    date: str | None = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description is required")
        return v


class ExerciseResponse(BaseModel):
    """An appended exercise echoed with its user's identity."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    description: str
    duration: int
    date: str
    id: str = Field(alias="_id")


class LogEntryResponse(BaseModel):
    """A single entry in an exercise log."""

    model_config = ConfigDict(from_attributes=True)

    description: str
    duration: int
    date: str


class ExerciseLogResponse(BaseModel):
    """A user's filtered exercise log."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    count: int
    id: str = Field(alias="_id")
    log: list[LogEntryResponse]


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
