"""Shelter ORM — the organization housing animals.

Invariants:
    - opening_time < closing_time (enforced at the schema boundary)
    - postal_code, phone, nif formats validated before insert (schemas/shelter.py)

Design Decisions:
    - Opening hours stored as Time: visit checks compare only the time-of-day part
"""

import uuid
from datetime import datetime, time

from sqlalchemy import String, DateTime, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.db.base import Base
from seepaw.db.types import utc_now


class Shelter(Base):
    """Shelter — owns animals, admins, and the visit calendar."""
    __tablename__ = "shelters"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    street: Mapped[str] = mapped_column(String(200), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(8), nullable=False)
    phone: Mapped[str] = mapped_column(String(9), nullable=False)
    nif: Mapped[str] = mapped_column(String(9), nullable=False)
    opening_time: Mapped[time] = mapped_column(Time, nullable=False)
    closing_time: Mapped[time] = mapped_column(Time, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, onupdate=utc_now,
    )

    images: Mapped[list["Image"]] = relationship(
        "Image", back_populates="shelter",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Image.created_at",
    )
