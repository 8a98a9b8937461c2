"""Notification Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from seepaw.core.domain_types import NotificationType


class NotificationResponse(BaseModel):
    id: UUID
    type: NotificationType
    message: str
    is_read: bool
    read_at: datetime | None = None
    animal_id: UUID | None = None
    ownership_request_id: UUID | None = None
    activity_id: UUID | None = None
    created_at: datetime
