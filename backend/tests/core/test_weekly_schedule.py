"""Weekly Schedule — tests for the pure week calculator.

Tests cover:
    - week start validation (Monday, one month back to one year ahead)
    - splitting at midnight and clamping to opening hours
    - free ranges as the gaps between busy segments
    - build_week placing segments on their day and ignoring the rest
"""

from datetime import date, datetime, time

from seepaw.core.weekly_schedule import (
    END_OF_DAY,
    Segment,
    TimeBlock,
    build_week,
    check_fostered_by_caller,
    check_opening_hours,
    check_week_start,
    clamp_to_hours,
    free_ranges,
    split_by_day,
    week_bounds,
)

TODAY = date(2026, 10, 16)  # a Friday
MONDAY = date(2026, 10, 19)
OPEN, CLOSE = time(9, 0), time(18, 0)


def _at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, day, hour, minute)


# --- Validation --------------------------------------------------------------------

def test_monday_in_range_passes():
    assert check_week_start(MONDAY, TODAY) is None


def test_tuesday_rejected():
    result = check_week_start(date(2026, 10, 20), TODAY)
    assert result.code == 400
    assert result.error == "Start date must be a Monday"


def test_range_bounds():
    assert check_week_start(date(2026, 9, 21), TODAY) is None
    assert check_week_start(date(2026, 9, 14), TODAY).code == 400
    assert check_week_start(date(2027, 10, 11), TODAY) is None
    assert check_week_start(date(2027, 10, 18), TODAY).code == 400


def test_range_checked_before_weekday():
    result = check_week_start(date(2030, 1, 2), TODAY)
    assert "within the last month" in result.error


def test_not_fostered_is_conflict():
    assert check_fostered_by_caller(True) is None
    assert check_fostered_by_caller(False).code == 409


def test_inverted_opening_hours_rejected():
    assert check_opening_hours(OPEN, CLOSE) is None
    assert check_opening_hours(CLOSE, OPEN).code == 400


def test_week_bounds_cover_seven_days():
    start, end = week_bounds(MONDAY)
    assert start == datetime(2026, 10, 19, 0, 0)
    assert end == datetime(2026, 10, 26, 0, 0)


# --- Normalization -----------------------------------------------------------------

def test_same_day_segment_not_split():
    segment = Segment(_at(19, 10), _at(19, 11))
    assert split_by_day(segment) == [segment]


def test_split_at_midnight_keeps_ref():
    pieces = split_by_day(Segment(_at(19, 22), _at(21, 2), ref="closure"))

    assert [(p.start, p.end) for p in pieces] == [
        (_at(19, 22), datetime.combine(date(2026, 10, 19), END_OF_DAY)),
        (_at(20, 0), datetime.combine(date(2026, 10, 20), END_OF_DAY)),
        (_at(21, 0), _at(21, 2)),
    ]
    assert {p.ref for p in pieces} == {"closure"}


def test_segment_ending_at_midnight_has_no_empty_tail():
    pieces = split_by_day(Segment(_at(19, 20), _at(20, 0)))
    assert len(pieces) == 1
    assert pieces[0].day == date(2026, 10, 19)


def test_clamp_to_hours():
    clamped = clamp_to_hours(Segment(_at(19, 7), _at(19, 10)), OPEN, CLOSE)
    assert (clamped.start, clamped.end) == (_at(19, 9), _at(19, 10))


def test_clamp_outside_hours_is_dropped():
    assert clamp_to_hours(Segment(_at(19, 19), _at(19, 21)), OPEN, CLOSE) is None


# --- Availability ------------------------------------------------------------------

def test_free_ranges_between_busy_segments():
    day = date(2026, 10, 19)
    busy = [Segment(_at(19, 14), _at(19, 15)), Segment(_at(19, 10), _at(19, 11))]

    assert free_ranges(day, busy, OPEN, CLOSE) == [
        TimeBlock(day, time(9), time(10)),
        TimeBlock(day, time(11), time(14)),
        TimeBlock(day, time(15), time(18)),
    ]


def test_overlapping_busy_segments_merge():
    day = date(2026, 10, 19)
    busy = [Segment(_at(19, 10), _at(19, 12)), Segment(_at(19, 11), _at(19, 13))]

    assert free_ranges(day, busy, OPEN, CLOSE) == [
        TimeBlock(day, time(9), time(10)),
        TimeBlock(day, time(13), time(18)),
    ]


def test_fully_busy_day_has_no_free_range():
    day = date(2026, 10, 19)
    assert free_ranges(day, [Segment(_at(19, 9), _at(19, 18))], OPEN, CLOSE) == []


def test_build_week():
    reserved = [Segment(_at(21, 10), _at(21, 11), ref="visit")]
    unavailable = [
        Segment(_at(24, 0), _at(25, 23), ref="weekend"),
        Segment(_at(30, 10), _at(30, 11), ref="next week"),
    ]

    days = build_week(MONDAY, reserved, unavailable, OPEN, CLOSE)

    assert [d.day for d in days] == [date(2026, 10, 19 + i) for i in range(7)]
    assert days[0].available == [TimeBlock(MONDAY, OPEN, CLOSE)]
    assert [s.ref for s in days[2].reserved] == ["visit"]
    assert len(days[2].available) == 2
    assert days[5].available == [] and days[6].available == []
    assert [s.ref for s in days[5].unavailable] == ["weekend"]
    assert all(not d.unavailable for d in days[:5])
