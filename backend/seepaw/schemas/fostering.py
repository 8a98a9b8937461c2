"""Fostering Schemas — monthly sponsorship of an animal."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from seepaw.core.domain_types import FosteringStatus, AnimalState


class FosteringCreate(BaseModel):
    animal_id: UUID
    month_value: Decimal = Field(gt=0, max_digits=6, decimal_places=2)


class FosteringResponse(BaseModel):
    id: UUID
    animal_id: UUID
    animal_name: str
    animal_state: AnimalState
    amount: float
    status: FosteringStatus
    start_date: datetime
    end_date: datetime | None = None
    principal_image_url: str | None = None
