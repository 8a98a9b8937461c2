"""Image Schemas — image metadata in, gallery entries out.

Invariants:
    - url must be http(s); public_id is the storage provider's key
    - description ≤ 255 chars
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ImageCreate(BaseModel):
    """Metadata for an image already uploaded to external storage."""
    url: str = Field(min_length=1, max_length=500)
    public_id: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=255)
    is_principal: bool = False

    @field_validator("url")
    @classmethod
    def require_http_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v


class ImageBatchCreate(BaseModel):
    images: list[ImageCreate] = Field(min_length=1, max_length=10)


class ImageResponse(BaseModel):
    id: UUID
    url: str
    public_id: str
    description: str | None = None
    is_principal: bool
    created_at: datetime
