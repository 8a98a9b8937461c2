"""Schedule Handlers — the weekly calendar a fosterer sees before booking a visit.

Invariants:
    - Only users with an Active fostering of the animal may read its schedule (409)
    - The week is Monday 00:00 to the next Monday 00:00 on the shelter's clock; the
      database is queried with the UTC equivalents of those bounds
    - Reserved = slots of Active activities of this animal; unavailable = the shelter's
      Unavailable blocks; both clipped to opening hours by core/weekly_schedule
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import (
    ActivityStatus, ActivityType, FosteringStatus, SlotStatus, SlotType,
)
from seepaw.core.result import Result, not_found
from seepaw.core.weekly_schedule import (
    Segment,
    build_week,
    check_fostered_by_caller,
    check_opening_hours,
    check_week_start,
    week_bounds,
)
from seepaw.db.types import from_local, to_local, utc_now
from seepaw.models.activity import Activity
from seepaw.models.activity_slot import ActivitySlot
from seepaw.models.fostering import Fostering
from seepaw.models.user import User
from seepaw.services import map_dtos
from seepaw.services.lookups import get_animal
from seepaw.services.messages import GetAnimalWeeklySchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reservation:
    """What a reserved segment shows: the slot, its activity type and who booked it."""
    slot: ActivitySlot
    activity_type: ActivityType
    reserved_by: str
    is_own: bool


class ScheduleHandlers:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_weekly_schedule(self, query: GetAnimalWeeklySchedule) -> Result:
        tz = self.settings.shelter_tz
        today = to_local(utc_now(), tz).date()
        error = check_week_start(query.start_date, today)
        if error:
            return error

        animal = await get_animal(self.db, query.animal_id)
        if animal is None:
            return not_found("Animal not found")
        fostering = await self.db.scalar(
            select(Fostering.id).where(
                Fostering.animal_id == animal.id,
                Fostering.user_id == query.caller.id,
                Fostering.status == FosteringStatus.ACTIVE,
            ).limit(1),
        )
        shelter = animal.shelter
        error = (
            check_fostered_by_caller(fostering is not None)
            or check_opening_hours(shelter.opening_time, shelter.closing_time)
        )
        if error:
            return error

        local_start, local_end = week_bounds(query.start_date)
        window_start, window_end = from_local(local_start, tz), from_local(local_end, tz)

        reserved_rows = (await self.db.execute(
            select(ActivitySlot, Activity.type, Activity.user_id, User.name)
            .join(Activity, ActivitySlot.activity_id == Activity.id)
            .join(User, Activity.user_id == User.id)
            .where(
                Activity.animal_id == animal.id,
                Activity.status == ActivityStatus.ACTIVE,
                ActivitySlot.start_date < window_end,
                ActivitySlot.end_date > window_start,
            ),
        )).all()
        unavailable_slots = (await self.db.execute(
            select(ActivitySlot).where(
                ActivitySlot.shelter_id == animal.shelter_id,
                ActivitySlot.type == SlotType.SHELTER_UNAVAILABLE,
                ActivitySlot.status == SlotStatus.UNAVAILABLE,
                ActivitySlot.start_date < window_end,
                ActivitySlot.end_date > window_start,
            ),
        )).scalars().all()

        reserved = [
            Segment(
                to_local(slot.start_date, tz),
                to_local(slot.end_date, tz),
                Reservation(slot, activity_type, reserved_by, user_id == query.caller.id),
            )
            for slot, activity_type, user_id, reserved_by in reserved_rows
        ]
        unavailable = [
            Segment(to_local(slot.start_date, tz), to_local(slot.end_date, tz), slot)
            for slot in unavailable_slots
        ]
        days = build_week(
            query.start_date, reserved, unavailable,
            shelter.opening_time, shelter.closing_time,
        )
        logger.debug(
            f"Weekly schedule built: {len(reserved)} reserved, {len(unavailable)} unavailable",
            extra={"animal_id": animal.id, "user_id": query.caller.id},
        )
        return Result.success(map_dtos.weekly_schedule_dto(animal, query.start_date, days))
