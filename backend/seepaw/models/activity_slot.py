"""ActivitySlot ORM — one block on a shelter's calendar.

Invariants:
    - type == Activity ⇒ activity_id set; status Reserved while the activity is Active
    - type == ShelterUnavailable ⇒ activity_id is None; blocks any visit overlapping it
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.core.domain_types import SlotStatus, SlotType
from seepaw.db.base import Base
from seepaw.db.types import enum_column


class ActivitySlot(Base):
    __tablename__ = "activity_slots"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    shelter_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("shelters.id"), nullable=False,
    )
    activity_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("activities.id", ondelete="CASCADE"), nullable=True,
    )
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[SlotStatus] = mapped_column(enum_column(SlotStatus), nullable=False)
    type: Mapped[SlotType] = mapped_column(enum_column(SlotType), nullable=False)

    activity: Mapped["Activity | None"] = relationship(
        "Activity", back_populates="slot",
    )
