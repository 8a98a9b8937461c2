"""Breed Schemas."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class BreedCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class BreedResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None


class BreedSyncResponse(BaseModel):
    """Outcome of a catalogue sync — only previously unknown names are added."""
    added: int
    total: int
