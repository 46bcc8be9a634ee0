"""
Clock helpers.

All persisted timestamps are timezone-aware UTC; values read back from stores that drop
the offset (sqlite) go through ``as_utc`` before they reach the domain.
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def future_utc(*, minutes: int = 0, seconds: int = 0, now: datetime | None = None) -> datetime:
    return (now or utc_now()) + timedelta(minutes=minutes, seconds=seconds)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
