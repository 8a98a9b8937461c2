"""Column Helpers — enum storage and the naive-UTC timestamp convention.

Invariants:
    - Enums persisted by value ("HasOwner"), never by member name ("HAS_OWNER")
    - Every DateTime column holds naive UTC; utc_now() and as_naive_utc() are the only
      ways timestamps enter the database
    - Shelter opening hours are wall-clock times in the shelter's zone; comparisons
      against them go through shelter_wall_clock() or to_local(), never raw UTC

Design Decisions:
    - native_enum=False: VARCHAR + CHECK instead of PostgreSQL ENUM types, so adding a
      state never needs an ALTER TYPE migration and SQLite tests behave the same
    - Naive UTC over timezone-aware columns: SQLite drops tzinfo on round-trip, comparisons
      between loaded and fresh values must not mix aware and naive datetimes
    - Offset-aware client input keeps its own wall-clock reading for the opening-hours
      rule: clients book in shelter time, the offset only fixes the UTC instant
"""

from datetime import datetime, timezone, tzinfo
from enum import Enum

from sqlalchemy import Enum as SAEnum


def enum_column(enum_cls: type[Enum]) -> SAEnum:
    """SQLAlchemy Enum type storing member values."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Normalize client-supplied datetimes: aware → UTC then drop tzinfo; naive assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Naive UTC → naive wall-clock time in `tz`."""
    return value.replace(tzinfo=timezone.utc).astimezone(tz).replace(tzinfo=None)


def from_local(value: datetime, tz: tzinfo) -> datetime:
    """Naive wall-clock time in `tz` → naive UTC."""
    return value.replace(tzinfo=tz).astimezone(timezone.utc).replace(tzinfo=None)


def shelter_wall_clock(value: datetime, tz: tzinfo) -> datetime:
    """What the shelter's clock reads at a client-supplied datetime.

    Aware input: its own wall-clock reading (tzinfo dropped, no conversion).
    Naive input: UTC, converted to `tz`.
    """
    if value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return to_local(value, tz)
