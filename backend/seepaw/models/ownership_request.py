"""OwnershipRequest ORM — a user's request to adopt an animal.

Invariants:
    - amount copied from animal.cost at creation time
    - approved_at set only when status becomes Approved
    - At most one Approved request per animal (enforced by ApproveOwnershipRequest)
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.core.domain_types import OwnershipStatus
from seepaw.db.base import Base
from seepaw.db.types import enum_column, utc_now


class OwnershipRequest(Base):
    __tablename__ = "ownership_requests"

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
    status: Mapped[OwnershipStatus] = mapped_column(
        enum_column(OwnershipStatus), nullable=False, default=OwnershipStatus.PENDING,
    )
    request_info: Mapped[str | None] = mapped_column(String(500), nullable=True)
    requested_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    animal: Mapped["Animal"] = relationship("Animal", lazy="selectin")
    user: Mapped["User"] = relationship("User", lazy="selectin")
