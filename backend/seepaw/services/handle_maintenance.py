"""Maintenance Handlers — periodic housekeeping run by the background sweep.

Invariants:
    - Only Active activities whose end_date has passed are completed
    - Completed activities keep their Reserved slot (the calendar keeps history)
    - Reminders go to Active activities whose start or end falls in
      [now + lead, now + lead + window]; one to the user, one to each shelter admin
    - A reminder is sent at most once per (activity, reminder type), however many
      sweeps see the activity inside the window
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.domain_types import ActivityStatus, ActivityType, NotificationType
from seepaw.core.result import Result
from seepaw.db.types import to_local, utc_now
from seepaw.models.activity import Activity
from seepaw.models.notification import Notification
from seepaw.services.messages import CompleteFinishedActivities, SendActivityReminders
from seepaw.services.notify import notify_shelter_admins, notify_user

logger = logging.getLogger(__name__)

# (user type, shelter type, verb) per activity edge
_START = (
    NotificationType.ACTIVITY_START_REMINDER,
    NotificationType.SHELTER_ACTIVITY_START_REMINDER,
    "starts",
)
_END = (
    NotificationType.ACTIVITY_END_REMINDER,
    NotificationType.SHELTER_ACTIVITY_END_REMINDER,
    "ends",
)
_ACTIVITY_NAMES = {
    ActivityType.FOSTERING: "fostering visit",
    ActivityType.OWNERSHIP: "adoption pick-up",
}


class MaintenanceHandlers:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def complete_finished_activities(
        self, command: CompleteFinishedActivities,
    ) -> Result:
        """Mark every Active activity that has ended as Completed. Returns the count."""
        result = await self.db.execute(
            select(Activity).where(
                Activity.status == ActivityStatus.ACTIVE,
                Activity.end_date <= utc_now(),
            ),
        )
        finished = result.scalars().all()
        for activity in finished:
            activity.status = ActivityStatus.COMPLETED
        if finished:
            await self.db.commit()
            logger.info(
                f"Completed {len(finished)} finished activities",
                extra={"completed": len(finished)},
            )
        return Result.success(len(finished))

    async def send_activity_reminders(self, command: SendActivityReminders) -> Result:
        """Remind users and shelter admins of activities starting or ending soon.

        Returns how many activity edges (start or end) were reminded about.
        """
        window_start = utc_now() + timedelta(hours=self.settings.reminder_lead_hours)
        window_end = window_start + timedelta(minutes=self.settings.reminder_window_minutes)
        result = await self.db.execute(
            select(Activity).where(
                Activity.status == ActivityStatus.ACTIVE,
                or_(
                    and_(Activity.start_date >= window_start, Activity.start_date <= window_end),
                    and_(Activity.end_date >= window_start, Activity.end_date <= window_end),
                ),
            ),
        )
        activities = result.scalars().all()
        if not activities:
            return Result.success(0)

        sent_rows = await self.db.execute(
            select(Notification.activity_id, Notification.type).where(
                Notification.activity_id.in_([a.id for a in activities]),
            ),
        )
        already_sent = {(activity_id, type_) for activity_id, type_ in sent_rows.all()}

        reminded = 0
        for activity in activities:
            for edge, moment in ((_START, activity.start_date), (_END, activity.end_date)):
                if not window_start <= moment <= window_end:
                    continue
                if (activity.id, edge[0]) in already_sent:
                    continue
                await self._remind(activity, edge, moment)
                reminded += 1

        if reminded:
            await self.db.commit()
            logger.info(
                f"Sent {reminded} activity reminders",
                extra={"reminded": reminded},
            )
        return Result.success(reminded)

    async def _remind(
        self, activity: Activity, edge: tuple, moment: datetime,
    ) -> None:
        user_type, shelter_type, verb = edge
        animal = activity.animal
        what = _ACTIVITY_NAMES[activity.type]
        when = to_local(moment, self.settings.shelter_tz).strftime("%Y-%m-%d %H:%M")
        notify_user(
            self.db, activity.user_id, user_type,
            f"Reminder: your {what} with {animal.name} {verb} at {when}",
            animal_id=animal.id, activity_id=activity.id,
        )
        await notify_shelter_admins(
            self.db, animal.shelter_id, shelter_type,
            f"Reminder: a {what} with {animal.name} {verb} at {when}",
            animal_id=animal.id, activity_id=activity.id,
        )
