"""Fostering Activity Handlers — shelter visits by users who foster an animal.

Invariants:
    - Only users with an Active fostering of the animal can book or cancel a visit
    - Date checks run before any lookup; calendar checks run after the animal is known
    - Each visit owns one Reserved ActivitySlot; cancelling sets it back to Available
    - The visit list only shows upcoming visits whose fostering is still active and whose
      animal has a principal image

Design Decisions:
    - Opening hours use the shelter's wall clock; calendar overlaps compare UTC
    - Calendar conflicts resolved with three EXISTS-style queries (shelter blocks, slots
      reserved for the same animal, the user's own active activities) so each failure
      keeps its own message
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import (
    ActivityStatus, ActivityType, FosteringStatus, SlotStatus, SlotType,
)
from seepaw.core.enforce_activities import (
    check_active_fostering,
    check_animal_visitable,
    validate_fostering_cancellation,
    validate_visit_calendar,
    validate_visit_timing,
)
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, not_found
from seepaw.db.types import as_naive_utc, shelter_wall_clock, utc_now
from seepaw.models.activity import Activity
from seepaw.models.activity_slot import ActivitySlot
from seepaw.models.fostering import Fostering
from seepaw.models.image import Image
from seepaw.services import map_dtos
from seepaw.services.lookups import get_activity, get_animal
from seepaw.services.messages import (
    CreateFosteringActivity, CancelFosteringActivity, ListFosteringActivities,
)
from seepaw.services.paging import fetch_page

logger = logging.getLogger(__name__)


class FosteringActivityHandlers:
    """Create, cancel and list fostering visits."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def _has_active_fostering(self, user_id, animal_id) -> bool:
        found = await self.db.scalar(
            select(Fostering.id).where(
                Fostering.user_id == user_id,
                Fostering.animal_id == animal_id,
                Fostering.status == FosteringStatus.ACTIVE,
            ).limit(1),
        )
        return found is not None

    async def _exists(self, stmt) -> bool:
        return bool(await self.db.scalar(select(stmt.exists())))

    async def create_activity(self, command: CreateFosteringActivity) -> Result:
        start = as_naive_utc(command.start_date)
        end = as_naive_utc(command.end_date)
        user_id = command.caller.id

        error = validate_visit_timing(
            start, end, utc_now(),
            self.settings.fostering_min_lead_hours,
            self.settings.fostering_min_end_days,
        )
        if error:
            return error

        animal = await get_animal(self.db, command.animal_id)
        if animal is None:
            return not_found("Animal not found")
        error = (
            check_animal_visitable(animal)
            or check_active_fostering(
                await self._has_active_fostering(user_id, animal.id),
            )
        )
        if error:
            return error

        shelter_block = select(ActivitySlot.id).where(
            ActivitySlot.shelter_id == animal.shelter_id,
            ActivitySlot.type == SlotType.SHELTER_UNAVAILABLE,
            ActivitySlot.status != SlotStatus.AVAILABLE,
            ActivitySlot.start_date < end,
            ActivitySlot.end_date > start,
        )
        reserved_for_animal = (
            select(ActivitySlot.id)
            .join(Activity, ActivitySlot.activity_id == Activity.id)
            .where(
                Activity.animal_id == animal.id,
                ActivitySlot.status == SlotStatus.RESERVED,
                ActivitySlot.start_date < end,
                ActivitySlot.end_date > start,
            )
        )
        user_busy = select(Activity.id).where(
            Activity.user_id == user_id,
            Activity.status == ActivityStatus.ACTIVE,
            Activity.start_date < end,
            Activity.end_date > start,
        )
        tz = self.settings.shelter_tz
        error = validate_visit_calendar(
            shelter_wall_clock(command.start_date, tz),
            shelter_wall_clock(command.end_date, tz),
            opening=animal.shelter.opening_time,
            closing=animal.shelter.closing_time,
            has_unavailability=await self._exists(shelter_block),
            has_reserved_slot=await self._exists(reserved_for_animal),
            has_user_overlap=await self._exists(user_busy),
        )
        if error:
            logger.info(
                f"Fostering visit rejected: {error.error}",
                extra={"animal_id": animal.id, "user_id": user_id},
            )
            return error

        activity = Activity(
            animal_id=animal.id,
            user_id=user_id,
            type=ActivityType.FOSTERING,
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
            "Fostering visit scheduled",
            extra={"activity_id": activity.id, "animal_id": animal.id, "user_id": user_id},
        )
        return Result.success(map_dtos.fostering_activity_dto(activity), 201)

    async def cancel_activity(self, command: CancelFosteringActivity) -> Result:
        activity = await get_activity(self.db, command.activity_id)
        if activity is None:
            return not_found("Activity not found")
        error = validate_fostering_cancellation(
            activity,
            command.caller.id,
            utc_now(),
            has_active_fostering=await self._has_active_fostering(
                activity.user_id, activity.animal_id,
            ),
        )
        if error:
            return error

        activity.status = ActivityStatus.CANCELLED
        activity.slot.status = SlotStatus.AVAILABLE
        await self.db.commit()
        logger.info("Fostering visit cancelled", extra={"activity_id": activity.id})
        return Result.success(map_dtos.fostering_activity_dto(activity))

    async def list_activities(self, query: ListFosteringActivities) -> Result:
        """Upcoming reserved visits, ordered by slot start."""
        error = check_page_bounds(query.page, query.size, self.settings.max_page_size)
        if error:
            return error

        user_id = query.caller.id
        has_principal_image = select(Image.id).where(
            Image.animal_id == Activity.animal_id,
            Image.is_principal.is_(True),
        ).exists()
        still_fostering = select(Fostering.id).where(
            Fostering.animal_id == Activity.animal_id,
            Fostering.user_id == user_id,
            Fostering.status == FosteringStatus.ACTIVE,
        ).exists()
        stmt = (
            select(Activity)
            .join(ActivitySlot, ActivitySlot.activity_id == Activity.id)
            .where(
                Activity.user_id == user_id,
                Activity.type == ActivityType.FOSTERING,
                Activity.status == ActivityStatus.ACTIVE,
                ActivitySlot.status == SlotStatus.RESERVED,
                ActivitySlot.start_date > utc_now(),
                has_principal_image,
                still_fostering,
            )
            .order_by(ActivitySlot.start_date, Activity.id)
        )
        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.fostering_activity_dto,
        )
        return Result.success(paged)
