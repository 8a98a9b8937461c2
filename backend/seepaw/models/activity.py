"""Activity ORM — a scheduled visit (fostering) or pick-up (ownership) at a shelter.

Invariants:
    - (animal_id, start_date) unique: one activity per animal per start instant
    - Only Active activities can be cancelled or completed
    - Every activity has exactly one ActivitySlot; slot status moves with activity status

Design Decisions:
    - Slot as separate table: the shelter calendar (including ShelterUnavailable blocks)
      is queried without touching activities
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.core.domain_types import ActivityType, ActivityStatus
from seepaw.db.base import Base
from seepaw.db.types import enum_column, utc_now


class Activity(Base):
    __tablename__ = "activities"
    __table_args__ = (
        UniqueConstraint("animal_id", "start_date", name="uq_activities_animal_start"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    animal_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("animals.id", ondelete="CASCADE"), nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    type: Mapped[ActivityType] = mapped_column(enum_column(ActivityType), nullable=False)
    status: Mapped[ActivityStatus] = mapped_column(
        enum_column(ActivityStatus), nullable=False, default=ActivityStatus.ACTIVE,
    )
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )

    animal: Mapped["Animal"] = relationship("Animal", lazy="selectin")
    slot: Mapped["ActivitySlot | None"] = relationship(
        "ActivitySlot", back_populates="activity", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
