"""Animal Schemas — create/edit payloads, list summaries, and the details view.

Invariants:
    - cost in [0, 1000]
    - birth_date not in the future
    - Enum fields accept only the stored values ("Dog", "Medium", ...)
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from seepaw.core.domain_types import AnimalState, Species, SizeType, SexType
from seepaw.schemas.image import ImageResponse


class AnimalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=250)
    species: Species
    size: SizeType
    sex: SexType
    colour: str = Field(min_length=1, max_length=50)
    birth_date: date
    sterilized: bool = False
    cost: Decimal = Field(ge=0, le=1000, max_digits=6, decimal_places=2)
    features: str | None = Field(None, max_length=300)
    breed_id: UUID

    @field_validator("name", "colour")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v

    @field_validator("birth_date")
    @classmethod
    def not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("birth_date cannot be in the future")
        return v


class AnimalUpdate(AnimalCreate):
    """Full replacement of the editable fields; state and owner are never edited directly."""
    pass


class AnimalSummary(BaseModel):
    id: UUID
    name: str
    species: Species
    size: SizeType
    sex: SexType
    age: int
    animal_state: AnimalState
    breed_name: str
    shelter_id: UUID
    shelter_name: str
    principal_image_url: str | None = None


class AnimalDetails(AnimalSummary):
    description: str | None = None
    colour: str
    birth_date: date
    sterilized: bool
    cost: float
    features: str | None = None
    breed_id: UUID
    created_at: datetime
    images: list[ImageResponse] = []


class EligibilityResponse(BaseModel):
    animal_id: UUID
    eligible: bool
    message: str
