"""Local calendar-date helpers.

Dates travel through the application as canonical ``YYYY-MM-DD`` strings in
the user's local time zone. These helpers convert between that form and
``datetime.date`` and do all day arithmetic on proleptic ordinals.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import PreconditionViolation

DateLike = Union[str, date]

_CANONICAL_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_local_date(value: DateLike) -> date:
    """Return the calendar day for a canonical date string (or pass a date through)."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        raise PreconditionViolation(f"Expected a YYYY-MM-DD date string, got {value!r}")
    if not _CANONICAL_RE.fullmatch(value):
        raise PreconditionViolation(f"Date {value!r} is not in YYYY-MM-DD form")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise PreconditionViolation(f"Date {value!r} is not a valid calendar day") from exc


def format_local_date(day: date) -> str:
    """Format a day as a zero-padded ``YYYY-MM-DD`` string."""

    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def normalize_date(value: DateLike) -> str:
    """Validate a date and return its canonical string form."""

    return format_local_date(parse_local_date(value))


def local_today(tz_name: Optional[str] = None, *, now: Optional[datetime] = None) -> str:
    """Return today's canonical date in ``tz_name`` (or the system local zone).

    This is the only place the wall clock is read; callers resolve it once per
    request or command and pass the result down.
    """

    if tz_name:
        try:
            zone = ZoneInfo(tz_name)
        except ZoneInfoNotFoundError as exc:
            raise PreconditionViolation(f"Unknown time zone {tz_name!r}") from exc
        current = now.astimezone(zone) if now is not None else datetime.now(zone)
    else:
        current = now.astimezone() if now is not None else datetime.now().astimezone()
    return format_local_date(current.date())


def day_difference(earlier: date, later: date) -> int:
    """Whole calendar days from ``earlier`` to ``later``."""

    return later.toordinal() - earlier.toordinal()


def is_next_day(previous: date, current: date) -> bool:
    return day_difference(previous, current) == 1


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar day from ``start`` to ``end`` inclusive."""

    for offset in range(day_difference(start, end) + 1):
        yield start + timedelta(days=offset)


def check_span(start: date, end: date, max_days: int) -> int:
    """Return the inclusive day count of ``start..end``, rejecting bad ranges."""

    span = day_difference(start, end) + 1
    if span < 1:
        raise PreconditionViolation(
            f"Range start {format_local_date(start)} is after end {format_local_date(end)}"
        )
    if span > max_days:
        raise PreconditionViolation(f"Range covers {span} days; at most {max_days} allowed")
    return span


def iter_days_backward(start: date, limit: int) -> Iterator[date]:
    """Yield ``start`` and the ``limit - 1`` days before it, newest first.

    Stops at ``date.min`` when fewer than ``limit`` days precede ``start``.
    """

    for offset in range(min(limit, start.toordinal())):
        yield start - timedelta(days=offset)


__all__ = [
    "DateLike",
    "check_span",
    "day_difference",
    "format_local_date",
    "is_next_day",
    "iter_days",
    "iter_days_backward",
    "local_today",
    "normalize_date",
    "parse_local_date",
]
