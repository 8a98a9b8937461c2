"""Shelter Schemas — Portuguese address/phone/NIF formats validated at the boundary.

Invariants:
    - postal_code matches NNNN-NNN
    - phone is 9 digits starting with 2 or 9
    - nif is 9 digits
    - opening_time < closing_time
"""

from datetime import time
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from seepaw.schemas.image import ImageResponse

POSTAL_CODE_PATTERN = r"^\d{4}-\d{3}$"
PHONE_PATTERN = r"^[29]\d{8}$"
NIF_PATTERN = r"^\d{9}$"


class ShelterUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    street: str = Field(min_length=1, max_length=200)
    city: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(pattern=POSTAL_CODE_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    nif: str = Field(pattern=NIF_PATTERN)
    opening_time: time
    closing_time: time

    @model_validator(mode="after")
    def opening_before_closing(self) -> "ShelterUpdate":
        if self.opening_time >= self.closing_time:
            raise ValueError("opening_time must be before closing_time")
        return self


class ShelterResponse(BaseModel):
    id: UUID
    name: str
    street: str
    city: str
    postal_code: str
    phone: str
    nif: str
    opening_time: time
    closing_time: time
    images: list[ImageResponse] = []
