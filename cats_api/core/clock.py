"""Clock — injectable "now" for every time-dependent rule.

Invariants:
    - Every clock returns an aware datetime in UTC
    - Domain code never calls datetime.now() directly; it receives an instant

Design Decisions:
    - Plain callable over Protocol class: a lambda or fixed_clock() is enough
      for tests, utc_now for production
"""

from collections.abc import Callable
from datetime import date, datetime, time, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Production clock — system time in UTC."""
    return datetime.now(timezone.utc)


def fixed_clock(instant: datetime | date) -> Clock:
    """Clock frozen at `instant` (normalized to UTC)."""
    frozen = to_utc(instant)

    def _now() -> datetime:
        return frozen

    return _now


def to_utc(value: datetime | date) -> datetime:
    """Normalize to an aware UTC datetime.

    Naive datetimes are taken to already be UTC; plain dates become midnight UTC.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
