"""Image ORM — a picture attached to an animal or a shelter.

Invariants:
    - Exactly one of animal_id / shelter_id is set
    - At most one principal image per owner (enforced by ImageHandlers)
    - url/public_id reference external storage; bytes never stored here
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from seepaw.db.base import Base
from seepaw.db.types import utc_now


class Image(Base):
    __tablename__ = "images"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    animal_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("animals.id", ondelete="CASCADE"), nullable=True,
    )
    shelter_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("shelters.id", ondelete="CASCADE"), nullable=True,
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    public_id: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_principal: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now,
    )

    animal: Mapped["Animal | None"] = relationship("Animal", back_populates="images")
    shelter: Mapped["Shelter | None"] = relationship("Shelter", back_populates="images")
