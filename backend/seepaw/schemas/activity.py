"""Activity Schemas — visit scheduling payloads and responses.

Invariants:
    - Datetimes may arrive timezone-aware; handlers normalize them to naive UTC
    - end > start is a business rule (400 from the handler, not a 422 from here)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from seepaw.core.domain_types import ActivityStatus, ActivityType


class ActivityCreate(BaseModel):
    animal_id: UUID
    start_date: datetime
    end_date: datetime


class ActivityResponse(BaseModel):
    id: UUID
    animal_id: UUID
    animal_name: str
    user_id: UUID
    type: ActivityType
    status: ActivityStatus
    start_date: datetime
    end_date: datetime
    created_at: datetime


class FosteringActivityResponse(ActivityResponse):
    shelter_name: str
    slot_start: datetime
    slot_end: datetime
    principal_image_url: str | None = None
