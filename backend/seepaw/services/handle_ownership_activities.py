"""Ownership Activity Handlers — pick-up scheduling for animals with an approved owner.

Invariants:
    - Rule order is fixed by core/enforce_activities.validate_ownership_activity
    - Creating an activity reserves a calendar slot; cancelling frees it (same commit)
    - Timestamps from clients are normalized to naive UTC before any comparison

Design Decisions:
    - Overlap checked against Active activities of the same animal OR the same user:
      an owner cannot be in two places, an animal cannot leave twice
    - The (animal_id, start_date) unique constraint also covers cancelled rows; the
      session manager turns a clash there into a 409 ConflictError
    - Opening hours are checked against the shelter's wall clock, the rest in UTC
"""

import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import (
    ActivityStatus, ActivityType, OwnershipStatus, SlotStatus, SlotType,
)
from seepaw.core.enforce_activities import (
    validate_ownership_activity, validate_ownership_cancellation,
)
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, bad_request, not_found
from seepaw.db.types import as_naive_utc, shelter_wall_clock, utc_now
from seepaw.models.activity import Activity
from seepaw.models.activity_slot import ActivitySlot
from seepaw.models.ownership_request import OwnershipRequest
from seepaw.services import map_dtos
from seepaw.services.lookups import get_activity, get_animal
from seepaw.services.messages import (
    CreateOwnershipActivity, CancelOwnershipActivity, ListOwnershipActivities,
)
from seepaw.services.paging import fetch_page

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"


def parse_status_filter(raw: str | None) -> tuple[ActivityStatus | None, bool]:
    """(status, ok). Case-insensitive; empty or "All" means no filter."""
    if raw is None or not raw.strip() or raw.strip().lower() == ALL_STATUSES:
        return None, True
    for status in ActivityStatus:
        if status.value.lower() == raw.strip().lower():
            return status, True
    return None, False


class OwnershipActivityHandlers:
    """Create, cancel and list ownership (pick-up) activities."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def create_activity(self, command: CreateOwnershipActivity) -> Result:
        start = as_naive_utc(command.start_date)
        end = as_naive_utc(command.end_date)
        user_id = command.caller.id

        animal = await get_animal(self.db, command.animal_id)
        if animal is None:
            return not_found("Animal not found")

        approved = await self.db.scalar(
            select(OwnershipRequest.id).where(
                OwnershipRequest.animal_id == animal.id,
                OwnershipRequest.user_id == user_id,
                OwnershipRequest.status == OwnershipStatus.APPROVED,
            ),
        )
        last_completed_end = await self.db.scalar(
            select(func.max(Activity.end_date)).where(
                Activity.animal_id == animal.id,
                Activity.status == ActivityStatus.COMPLETED,
            ),
        )
        overlap = await self.db.scalar(
            select(Activity.id).where(
                or_(Activity.animal_id == animal.id, Activity.user_id == user_id),
                Activity.status == ActivityStatus.ACTIVE,
                Activity.start_date < end,
                Activity.end_date > start,
            ).limit(1),
        )

        error = validate_ownership_activity(
            animal,
            user_id,
            has_approved_request=approved is not None,
            start=start,
            end=end,
            now=utc_now(),
            opening=animal.shelter.opening_time,
            closing=animal.shelter.closing_time,
            last_completed_end=last_completed_end,
            has_overlap=overlap is not None,
            notice_hours=self.settings.ownership_notice_hours,
            local_start=shelter_wall_clock(command.start_date, self.settings.shelter_tz),
            local_end=shelter_wall_clock(command.end_date, self.settings.shelter_tz),
        )
        if error:
            logger.info(
                f"Ownership activity rejected: {error.error}",
                extra={"animal_id": animal.id, "user_id": user_id},
            )
            return error

        activity = Activity(
            animal_id=animal.id,
            user_id=user_id,
            type=ActivityType.OWNERSHIP,
            status=ActivityStatus.ACTIVE,
            start_date=start,
            end_date=end,
        )
        activity.slot = ActivitySlot(
            shelter_id=animal.shelter_id,
            start_date=start,
            end_date=end,
            status=SlotStatus.RESERVED,
            type=SlotType.ACTIVITY,
        )
        self.db.add(activity)
        await self.db.commit()

        activity = await get_activity(self.db, activity.id, refresh=True)
        logger.info(
            "Ownership activity scheduled",
            extra={"activity_id": activity.id, "animal_id": animal.id, "user_id": user_id},
        )
        return Result.success(map_dtos.activity_dto(activity), 201)

    async def cancel_activity(self, command: CancelOwnershipActivity) -> Result:
        activity = await get_activity(self.db, command.activity_id)
        if activity is None:
            return not_found("Activity not found")
        error = validate_ownership_cancellation(activity, command.caller.id, utc_now())
        if error:
            return error

        activity.status = ActivityStatus.CANCELLED
        if activity.slot is not None:
            activity.slot.status = SlotStatus.AVAILABLE
        await self.db.commit()
        logger.info("Ownership activity cancelled", extra={"activity_id": activity.id})
        return Result.success(map_dtos.activity_dto(activity))

    async def list_activities(self, query: ListOwnershipActivities) -> Result:
        status, ok = parse_status_filter(query.status)
        if not ok:
            return bad_request(
                f"Invalid status '{query.status}'. Use All, "
                + ", ".join(s.value for s in ActivityStatus),
            )
        error = check_page_bounds(query.page, query.size, self.settings.max_page_size)
        if error:
            return error

        stmt = select(Activity).where(
            Activity.user_id == query.caller.id,
            Activity.type == ActivityType.OWNERSHIP,
        )
        if status is not None:
            stmt = stmt.where(Activity.status == status)
        stmt = stmt.order_by(Activity.start_date, Activity.id)
        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.activity_dto,
        )
        return Result.success(paged)
