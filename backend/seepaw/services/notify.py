"""Notification Emitters — stage in-app notifications inside the caller's transaction.

Invariants:
    - Emitters only db.add(); the calling handler commits, so a rejected command
      never leaves notifications behind
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.core.domain_types import NotificationType
from seepaw.models.notification import Notification
from seepaw.models.user import User

logger = logging.getLogger(__name__)


def notify_user(
    db: AsyncSession,
    user_id: UUID,
    type_: NotificationType,
    message: str,
    *,
    animal_id: UUID | None = None,
    ownership_request_id: UUID | None = None,
    activity_id: UUID | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type_,
        message=message,
        animal_id=animal_id,
        ownership_request_id=ownership_request_id,
        activity_id=activity_id,
    )
    db.add(notification)
    return notification


async def notify_shelter_admins(
    db: AsyncSession,
    shelter_id: UUID,
    type_: NotificationType,
    message: str,
    *,
    animal_id: UUID | None = None,
    ownership_request_id: UUID | None = None,
    activity_id: UUID | None = None,
) -> int:
    """Fan out one notification per admin of the shelter. Returns how many were staged."""
    result = await db.execute(select(User.id).where(User.shelter_id == shelter_id))
    admin_ids = result.scalars().all()
    for admin_id in admin_ids:
        notify_user(
            db, admin_id, type_, message,
            animal_id=animal_id, ownership_request_id=ownership_request_id,
            activity_id=activity_id,
        )
    if not admin_ids:
        logger.warning(
            "No admins to notify for shelter", extra={"shelter_id": shelter_id},
        )
    return len(admin_ids)
