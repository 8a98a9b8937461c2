"""Fostering ORM — a monthly sponsorship of an animal by a user."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.core.domain_types import FosteringStatus
from seepaw.db.base import Base
from seepaw.db.types import enum_column, utc_now


class Fostering(Base):
    __tablename__ = "fosterings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    animal_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("animals.id", ondelete="CASCADE"), nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[FosteringStatus] = mapped_column(
        enum_column(FosteringStatus), nullable=False, default=FosteringStatus.ACTIVE,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )
    end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    animal: Mapped["Animal"] = relationship(
        "Animal", back_populates="fosterings", lazy="selectin",
    )
