"""Activity Scheduling Enforcement — guards for creating and cancelling visits.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return a failed Result on violation, None on success
    - validate_* functions chain checks with `or` — first error wins, order is the contract
    - The current time is always passed in (now), never read here

Design Decisions:
    - Pure functions over handler methods: testable without a database (ADR: Functional Core)
    - Facts that need a query (approved request exists, overlap found, last completed end)
      are resolved by the handler and passed in as plain values
    - Shelter hours compare only the time-of-day part of start and end, read on the
      shelter's wall clock; every other rule works on naive UTC
"""

from datetime import datetime, time, timedelta

from seepaw.core.domain_types import (
    AnimalState, ActivityStatus, ActivityType, SlotStatus, FOSTERED_ANIMAL_STATES,
)
from seepaw.core.result import (
    Result, bad_request, forbidden, not_found, conflict, unprocessable,
)


# ─── Ownership activity ──────────────────────────────────────────

def check_requester_is_owner(animal, user_id) -> Result | None:
    if animal.owner_id != user_id:
        return forbidden("User is not the owner of this animal")
    return None


def check_animal_has_owner(animal) -> Result | None:
    if animal.animal_state != AnimalState.HAS_OWNER:
        return bad_request("Animal is not in a valid state for an ownership activity")
    return None


def check_approved_request(has_approved_request: bool) -> Result | None:
    if not has_approved_request:
        return forbidden("No approved ownership request found for this animal")
    return None


def check_advance_notice(
    start: datetime, now: datetime, notice_hours: int = 24,
) -> Result | None:
    """Rule: ownership pick-ups are booked at least `notice_hours` ahead."""
    if start < now + timedelta(hours=notice_hours):
        return bad_request(
            f"Activities must be scheduled at least {notice_hours} hours in advance",
        )
    return None


def check_end_after_start(start: datetime, end: datetime) -> Result | None:
    if end <= start:
        return bad_request("End date must be after start date")
    return None


def check_within_shelter_hours(
    start: datetime, end: datetime, opening: time, closing: time,
) -> Result | None:
    """Pick-up (start) and drop-off (end) must both happen while the shelter is open."""
    if not opening <= start.time() <= closing:
        return bad_request(
            f"Pick-up time must be within shelter hours ({opening:%H:%M}-{closing:%H:%M})",
        )
    if not opening <= end.time() <= closing:
        return bad_request(
            f"Drop-off time must be within shelter hours ({opening:%H:%M}-{closing:%H:%M})",
        )
    return None


def check_after_last_completed(
    start: datetime, last_completed_end: datetime | None,
) -> Result | None:
    if last_completed_end is not None and start < last_completed_end:
        return bad_request(
            "Activity must start after the end of the last completed activity for this animal",
        )
    return None


def check_no_conflict(has_overlap: bool) -> Result | None:
    if has_overlap:
        return conflict("There is already an activity scheduled in this period")
    return None


def validate_ownership_activity(
    animal,
    user_id,
    *,
    has_approved_request: bool,
    start: datetime,
    end: datetime,
    now: datetime,
    opening: time,
    closing: time,
    last_completed_end: datetime | None,
    has_overlap: bool,
    notice_hours: int = 24,
    local_start: datetime | None = None,
    local_end: datetime | None = None,
) -> Result | None:
    """All ownership-activity rules, in order. Animal existence is checked by the caller.

    local_start/local_end are the shelter wall-clock readings used for the opening-hours
    rule; they default to start/end when UTC and shelter time coincide.
    """
    local_start = start if local_start is None else local_start
    local_end = end if local_end is None else local_end
    return (
        check_requester_is_owner(animal, user_id)
        or check_animal_has_owner(animal)
        or check_approved_request(has_approved_request)
        or check_advance_notice(start, now, notice_hours)
        or check_end_after_start(start, end)
        or check_within_shelter_hours(local_start, local_end, opening, closing)
        or check_after_last_completed(start, last_completed_end)
        or check_no_conflict(has_overlap)
    )


# ─── Fostering activity (visit) ──────────────────────────────────

def check_visit_lead_time(
    start: datetime, end: datetime, now: datetime,
    min_lead_hours: int = 1, min_end_days: int = 1,
) -> Result | None:
    earliest_end = now + timedelta(days=min_end_days)
    if start < now + timedelta(hours=min_lead_hours) or end < earliest_end:
        return bad_request(
            f"Cannot schedule an activity before {earliest_end:%Y-%m-%d %H:%M}",
        )
    return None


def check_animal_visitable(animal) -> Result | None:
    if animal.animal_state not in FOSTERED_ANIMAL_STATES:
        return bad_request("Animal cannot be visited")
    return None


def check_active_fostering(has_active_fostering: bool) -> Result | None:
    if not has_active_fostering:
        return not_found("User is not fostering this animal")
    return None


def check_visit_within_opening_hours(
    start: datetime, end: datetime, opening: time, closing: time,
) -> Result | None:
    if start.time() < opening:
        return unprocessable("Activity cannot start before the shelter opening time")
    if end.time() > closing:
        return unprocessable("Activity cannot end after the shelter closing time")
    return None


def check_shelter_available(has_unavailability: bool) -> Result | None:
    if has_unavailability:
        return conflict("The shelter is unavailable during this period")
    return None


def check_slot_free(has_reserved_slot: bool) -> Result | None:
    if has_reserved_slot:
        return conflict("This time slot is already reserved")
    return None


def validate_visit_timing(
    start: datetime, end: datetime, now: datetime,
    min_lead_hours: int = 1, min_end_days: int = 1,
) -> Result | None:
    """Date-only checks that run before any lookup."""
    return (
        check_visit_lead_time(start, end, now, min_lead_hours, min_end_days)
        or check_end_after_start(start, end)
    )


def validate_visit_calendar(
    start: datetime,
    end: datetime,
    *,
    opening: time,
    closing: time,
    has_unavailability: bool,
    has_reserved_slot: bool,
    has_user_overlap: bool,
) -> Result | None:
    """Shelter-hours and calendar checks, after the animal and fostering are known."""
    return (
        check_visit_within_opening_hours(start, end, opening, closing)
        or check_shelter_available(has_unavailability)
        or check_slot_free(has_reserved_slot)
        or check_no_conflict(has_user_overlap)
    )


# ─── Cancellation ────────────────────────────────────────────────

def check_activity_owner(activity, user_id) -> Result | None:
    if activity.user_id != user_id:
        return forbidden("You are not allowed to cancel this activity")
    return None


def check_activity_type(activity, expected: ActivityType) -> Result | None:
    if activity.type != expected:
        return bad_request(f"Activity is not of type {expected.value}")
    return None


def check_activity_active(activity) -> Result | None:
    if activity.status == ActivityStatus.CANCELLED:
        return bad_request("This activity has already been cancelled")
    if activity.status == ActivityStatus.COMPLETED:
        return bad_request("Cannot cancel a completed activity")
    return None


def check_not_started(activity, now: datetime) -> Result | None:
    if activity.start_date <= now:
        return bad_request("Cannot cancel an activity that has already started")
    return None


def check_fostering_still_active(has_active_fostering: bool) -> Result | None:
    if not has_active_fostering:
        return forbidden("Fostering for this animal is no longer active")
    return None


def check_slot_reserved(slot) -> Result | None:
    if slot is None:
        return not_found("Activity slot not found")
    if slot.status != SlotStatus.RESERVED:
        return bad_request("Activity slot is not reserved")
    return None


def validate_ownership_cancellation(activity, user_id, now: datetime) -> Result | None:
    return (
        check_activity_owner(activity, user_id)
        or check_activity_type(activity, ActivityType.OWNERSHIP)
        or check_activity_active(activity)
        or check_not_started(activity, now)
    )


def validate_fostering_cancellation(
    activity, user_id, now: datetime, *, has_active_fostering: bool,
) -> Result | None:
    return (
        check_activity_owner(activity, user_id)
        or check_activity_type(activity, ActivityType.FOSTERING)
        or check_activity_active(activity)
        or check_fostering_still_active(has_active_fostering)
        or check_slot_reserved(activity.slot)
        or check_not_started(activity, now)
    )
