"""User Schemas — profile view and edit.

Invariants:
    - postal_code / phone_number follow the same formats as shelters
    - email and shelter membership are not editable through the profile
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from seepaw.schemas.shelter import POSTAL_CODE_PATTERN, PHONE_PATTERN


class UserProfileUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    birth_date: date | None = None
    street: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, pattern=POSTAL_CODE_PATTERN)
    phone_number: str | None = Field(None, pattern=PHONE_PATTERN)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("birth_date")
    @classmethod
    def not_in_future(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("birth_date cannot be in the future")
        return v


class UserProfileResponse(BaseModel):
    id: UUID
    name: str
    email: str
    birth_date: date | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone_number: str | None = None
    shelter_id: UUID | None = None
    is_shelter_admin: bool
