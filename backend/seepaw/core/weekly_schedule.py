"""Weekly Schedule — a fosterer's 7-day view of an animal's calendar at the shelter.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every datetime here is a naive wall-clock reading on the shelter's clock;
      the handler converts from UTC before calling in
    - Segments never cross midnight and never leave [opening, closing]
    - For each of the 7 days, available ranges + busy segments exactly cover
      [opening, closing] with no overlap between available ranges and busy ones
    - A week starts on a Monday between one month back and one year ahead

Design Decisions:
    - Busy slots keep an opaque `ref` (the row they came from) so the caller maps
      reserved and unavailable segments to DTOs without a second lookup
    - Multi-day slots are cut at midnight before clamping to opening hours, so a
      shelter closure spanning a weekend blocks every day it touches
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable

from seepaw.core.result import Result, bad_request, conflict

DAYS_IN_WEEK = 7
END_OF_DAY = time.max


@dataclass(frozen=True)
class Segment:
    """A busy stretch of one day: a reserved visit or a shelter closure."""
    start: datetime
    end: datetime
    ref: Any = None

    @property
    def day(self) -> date:
        return self.start.date()


@dataclass(frozen=True)
class TimeBlock:
    """A free stretch of one day."""
    day: date
    start: time
    end: time


@dataclass
class DaySchedule:
    day: date
    available: list[TimeBlock] = field(default_factory=list)
    reserved: list[Segment] = field(default_factory=list)
    unavailable: list[Segment] = field(default_factory=list)


# ─── Validation ──────────────────────────────────────────────────

def _one_month_before(day: date) -> date:
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    while True:
        try:
            return day.replace(year=year, month=month)
        except ValueError:
            day -= timedelta(days=1)


def _one_year_after(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:  # 29 February
        return day.replace(year=day.year + 1, day=28)


def check_week_start(start_date: date, today: date) -> Result | None:
    if not _one_month_before(today) <= start_date <= _one_year_after(today):
        return bad_request("Start date must be within the last month and the next year")
    if start_date.weekday() != 0:
        return bad_request("Start date must be a Monday")
    return None


def check_fostered_by_caller(has_active_fostering: bool) -> Result | None:
    """Only the animal's current fosterers may look at its calendar."""
    if not has_active_fostering:
        return conflict("Animal is not fostered by this user")
    return None


def check_opening_hours(opening: time, closing: time) -> Result | None:
    if opening >= closing:
        return bad_request("Shelter opening time must be before its closing time")
    return None


def week_bounds(start_date: date) -> tuple[datetime, datetime]:
    """[Monday 00:00, next Monday 00:00) on the shelter's clock."""
    start = datetime.combine(start_date, time.min)
    return start, start + timedelta(days=DAYS_IN_WEEK)


# ─── Normalization ───────────────────────────────────────────────

def split_by_day(segment: Segment) -> list[Segment]:
    """Cut a segment at every midnight it crosses."""
    if segment.start.date() == segment.end.date():
        return [segment]
    pieces = []
    current = segment.start
    while current.date() < segment.end.date():
        pieces.append(Segment(
            current, datetime.combine(current.date(), END_OF_DAY), segment.ref,
        ))
        current = datetime.combine(current.date() + timedelta(days=1), time.min)
    if segment.end > current:
        pieces.append(Segment(current, segment.end, segment.ref))
    return pieces


def clamp_to_hours(segment: Segment, opening: time, closing: time) -> Segment | None:
    """Trim a single-day segment to opening hours; None when nothing is left."""
    start = max(segment.start.time(), opening)
    end = min(segment.end.time(), closing)
    if end <= start:
        return None
    day = segment.day
    return Segment(datetime.combine(day, start), datetime.combine(day, end), segment.ref)


def normalize(
    segments: Iterable[Segment], opening: time, closing: time,
) -> list[Segment]:
    """Day-bound, hours-bound segments ordered by start."""
    normalized = []
    for segment in segments:
        for piece in split_by_day(segment):
            clamped = clamp_to_hours(piece, opening, closing)
            if clamped is not None:
                normalized.append(clamped)
    return sorted(normalized, key=lambda s: s.start)


# ─── Availability ────────────────────────────────────────────────

def free_ranges(
    day: date, busy: Iterable[Segment], opening: time, closing: time,
) -> list[TimeBlock]:
    """Gaps between the busy segments of one day, inside opening hours."""
    free = []
    cursor = opening
    for segment in sorted(busy, key=lambda s: s.start):
        start, end = segment.start.time(), segment.end.time()
        if start > cursor:
            free.append(TimeBlock(day, cursor, start))
        cursor = max(cursor, end)
    if cursor < closing:
        free.append(TimeBlock(day, cursor, closing))
    return free


def build_week(
    start_date: date,
    reserved: Iterable[Segment],
    unavailable: Iterable[Segment],
    opening: time,
    closing: time,
) -> list[DaySchedule]:
    """Seven DaySchedules from `start_date`, busy segments normalized to opening hours."""
    days = {
        start_date + timedelta(days=offset): DaySchedule(start_date + timedelta(days=offset))
        for offset in range(DAYS_IN_WEEK)
    }
    for segment in normalize(reserved, opening, closing):
        if segment.day in days:
            days[segment.day].reserved.append(segment)
    for segment in normalize(unavailable, opening, closing):
        if segment.day in days:
            days[segment.day].unavailable.append(segment)
    for schedule in days.values():
        schedule.available = free_ranges(
            schedule.day, schedule.reserved + schedule.unavailable, opening, closing,
        )
    return list(days.values())
