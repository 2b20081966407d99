"""SQLAlchemy models for exercise tracking."""

import datetime as dt
import uuid

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


def utcnow() -> dt.datetime:
    """Return current UTC time (timezone-aware)."""
    return dt.datetime.now(dt.UTC)


def new_id() -> str:
    """Return a new opaque record identifier (32 hex characters)."""
    return uuid.uuid4().hex


class User(Base):
    """A named user. Usernames are not unique; ids are."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


class Exercise(Base):
    """A single logged exercise entry. Entries are append-only."""

    __tablename__ = "exercises"
    __table_args__ = (Index("ix_exercises_user_id_date", "user_id", "date"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id"),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
