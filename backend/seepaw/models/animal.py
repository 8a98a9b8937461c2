"""Animal ORM — an animal housed by a shelter.

Invariants:
    - animal_state == HasOwner ⇒ owner_id is not None
    - cost in [0, 1000]; active fostering amounts never sum above it
    - Only Available / PartiallyFostered animals are publicly visible

Design Decisions:
    - breed, shelter, images loaded with selectin: every DTO needs them and async
      sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Text, Boolean, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.core.domain_types import AnimalState, Species, SizeType, SexType
from seepaw.db.base import Base
from seepaw.db.types import enum_column, utc_now


class Animal(Base):
    __tablename__ = "animals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    animal_state: Mapped[AnimalState] = mapped_column(
        enum_column(AnimalState), nullable=False, default=AnimalState.AVAILABLE,
    )
    description: Mapped[str | None] = mapped_column(String(250), nullable=True)
    species: Mapped[Species] = mapped_column(enum_column(Species), nullable=False)
    size: Mapped[SizeType] = mapped_column(enum_column(SizeType), nullable=False)
    sex: Mapped[SexType] = mapped_column(enum_column(SexType), nullable=False)
    colour: Mapped[str] = mapped_column(String(50), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    sterilized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    features: Mapped[str | None] = mapped_column(Text, nullable=True)

    shelter_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("shelters.id"), nullable=False,
    )
    breed_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("breeds.id"), nullable=False,
    )
    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True,
    )
    ownership_start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    ownership_end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, onupdate=utc_now,
    )

    # Relationships
    breed: Mapped["Breed"] = relationship("Breed", lazy="selectin")
    shelter: Mapped["Shelter"] = relationship("Shelter", lazy="selectin")
    images: Mapped[list["Image"]] = relationship(
        "Image", back_populates="animal",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Image.created_at",
    )
    fosterings: Mapped[list["Fostering"]] = relationship(
        "Fostering", back_populates="animal",
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def principal_image(self) -> "Image | None":
        return next((img for img in self.images if img.is_principal), None)
