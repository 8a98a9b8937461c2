"""Notification Handlers — a user's inbox.

Invariants:
    - A user only ever reads or changes their own notifications (403 otherwise)
    - Marking an already-read notification is a no-op success; read_at keeps its first value
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.config import Settings
from seepaw.core.pagination import check_page_bounds
from seepaw.core.result import Result, forbidden, not_found
from seepaw.db.types import utc_now
from seepaw.models.notification import Notification
from seepaw.services import map_dtos
from seepaw.services.messages import (
    ListNotifications, ListUnreadNotifications, MarkNotificationRead, DeleteNotification,
)
from seepaw.services.paging import fetch_page


class NotificationHandlers:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def _owned(self, caller, notification_id):
        """(notification, error)"""
        notification = await self.db.get(Notification, notification_id)
        if notification is None:
            return None, not_found("Notification not found")
        if notification.user_id != caller.id:
            return None, forbidden("Notification belongs to another user")
        return notification, None

    async def list_notifications(self, query: ListNotifications) -> Result:
        error = check_page_bounds(query.page, query.size, self.settings.max_page_size)
        if error:
            return error
        stmt = (
            select(Notification)
            .where(Notification.user_id == query.caller.id)
            .order_by(Notification.created_at.desc(), Notification.id)
        )
        paged = await fetch_page(
            self.db, stmt, query.page, query.size, map_dtos.notification_dto,
        )
        return Result.success(paged)

    async def list_unread(self, query: ListUnreadNotifications) -> Result:
        result = await self.db.execute(
            select(Notification)
            .where(
                Notification.user_id == query.caller.id,
                Notification.is_read.is_(False),
            )
            .order_by(Notification.created_at.desc()),
        )
        return Result.success(
            [map_dtos.notification_dto(n) for n in result.scalars().all()],
        )

    async def mark_read(self, command: MarkNotificationRead) -> Result:
        notification, error = await self._owned(command.caller, command.notification_id)
        if error:
            return error
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = utc_now()
            await self.db.commit()
        return Result.success(map_dtos.notification_dto(notification))

    async def delete_notification(self, command: DeleteNotification) -> Result:
        notification, error = await self._owned(command.caller, command.notification_id)
        if error:
            return error
        await self.db.delete(notification)
        await self.db.commit()
        return Result.success(None, 204)
