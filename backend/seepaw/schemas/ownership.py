"""Ownership Schemas — adoption requests and owned animals."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from seepaw.core.domain_types import OwnershipStatus
from seepaw.schemas.animal import AnimalSummary


class OwnershipRequestCreate(BaseModel):
    animal_id: UUID
    request_info: str | None = Field(None, max_length=500)


class OwnershipRejection(BaseModel):
    reason: str | None = Field(None, max_length=500)


class OwnershipRequestResponse(BaseModel):
    id: UUID
    animal_id: UUID
    animal_name: str
    user_id: UUID
    user_name: str
    amount: float
    status: OwnershipStatus
    request_info: str | None = None
    requested_at: datetime
    approved_at: datetime | None = None
    updated_at: datetime | None = None


class OwnedAnimalResponse(AnimalSummary):
    ownership_start_date: datetime | None = None
