"""Pure helpers for exercise log input coercion and output shaping.

No database or HTTP access here, so everything is directly unit-testable:
- parse_date / resolve_entry_date: calendar date parsing and defaulting
- coerce_duration / parse_limit: lenient integer coercion
- render_date: ``Sun Mar 05 2023`` style rendering
- shape_entries: reshape stored entries into log items
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime

from core.errors import ValidationError
from models import Exercise

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_LEADING_NUMBER_RE = re.compile(r"^([+-]?\d+)(\.\d+)?")

# Bounds of the INTEGER duration column
DURATION_MIN = -(2**31)
DURATION_MAX = 2**31 - 1


@dataclass(frozen=True)
class LogEntry:
    """One shaped entry in a user's exercise log."""

    description: str
    duration: int
    date: str


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds; None means unbounded on that side."""

    start: date | None = None
    end: date | None = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None


def today() -> date:
    """Return current UTC date."""
    return datetime.now(UTC).date()


def render_date(value: date) -> str:
    """Render a date as ``Www Mmm DD YYYY`` regardless of process locale."""
    return (
        f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} "
        f"{value.day:02d} {value.year:04d}"
    )


def parse_date(raw: str, field: str = "date") -> date:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 datetime into a calendar date.

    Raises:
        ValidationError: If the value is not a recognisable date.
    """
    value = raw.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        # Python 3.11+ accepts a trailing "Z" and most ISO-8601 variants
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {raw!r}", field=field) from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC)
    return parsed.date()


def resolve_entry_date(raw: str | None) -> date:
    """Use today's date when ``raw`` is absent or blank, else parse it."""
    if raw is None or not raw.strip():
        return today()
    return parse_date(raw)


def _check_duration_range(value: int) -> int:
    if not DURATION_MIN <= value <= DURATION_MAX:
        raise ValidationError("duration is out of range", field="duration")
    return value


def coerce_duration(raw: object) -> int:
    """Coerce a duration to an integer, truncating toward zero.

    Strings are parsed from their leading number, so ``"45min"`` is 45.

    Raises:
        ValidationError: If there is no number to take, or it does not fit
            the 32-bit duration column.
    """
    if raw is None:
        raise ValidationError("duration is required", field="duration")
    if isinstance(raw, bool):
        raise ValidationError("duration must be a number", field="duration")
    if isinstance(raw, int):
        return _check_duration_range(raw)
    if isinstance(raw, float):
        if raw != raw or raw in (float("inf"), float("-inf")):
            raise ValidationError("duration must be a number", field="duration")
        return _check_duration_range(int(raw))
    if not isinstance(raw, str):
        raise ValidationError("duration must be a number", field="duration")

    value = raw.strip()
    if not value:
        raise ValidationError("duration is required", field="duration")
    match = _LEADING_NUMBER_RE.match(value)
    if match is None:
        raise ValidationError("duration must be a number", field="duration")
    try:
        whole = int(match.group(1))
    except ValueError:
        # more digits than int() will convert
        raise ValidationError(
            "duration is out of range", field="duration"
        ) from None
    return _check_duration_range(whole)


def parse_limit(raw: str | int | None) -> int | None:
    """Parse the log ``limit`` parameter.

    Returns None (unlimited) for absent, blank, zero or negative values.

    Raises:
        ValidationError: If the value is not an integer.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        limit = raw
    else:
        value = raw.strip()
        if not value:
            return None
        try:
            limit = int(value)
        except ValueError:
            raise ValidationError(
                f"Invalid limit: {raw!r}", field="limit"
            ) from None
    return limit if limit > 0 else None


def build_date_range(start: str | None, end: str | None) -> DateRange:
    """Build inclusive bounds from optional ``from``/``to`` strings."""
    return DateRange(
        start=parse_date(start, field="from") if start and start.strip() else None,
        end=parse_date(end, field="to") if end and end.strip() else None,
    )


def shape_entries(entries: Iterable[Exercise]) -> list[LogEntry]:
    return [
        LogEntry(
            description=entry.description,
            duration=entry.duration,
            date=render_date(entry.date),
        )
        for entry in entries
    ]
