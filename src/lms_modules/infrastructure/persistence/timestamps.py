"""Audit timestamp helpers used by the repositories.

``created_at`` is stamped once on insert and ``updated_at`` on every
mutation. ``updated_at`` must strictly increase, even when two writes land
within the clock's resolution.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]

_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes.

    SQLite hands back naive values even for ``DateTime(timezone=True)``
    columns; everything written by this package is UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: datetime | None, clock: Clock = utc_now) -> datetime:
    """Return a timestamp strictly later than ``previous``.

    Args:
        previous: The current ``updated_at`` value, if any.
        clock: Source of the current time.

    Returns:
        datetime: ``clock()``, or ``previous`` plus one microsecond when the
        clock has not moved past it.
    """
    now = ensure_utc(clock())
    previous = ensure_utc(previous)
    if previous is not None and now <= previous:
        return previous + _TICK
    return now
