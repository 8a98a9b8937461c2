"""Activity reminders — notifications point at the activity they remind about.

Revision ID: 002_activity_reminders
Revises: 001_initial
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002_activity_reminders"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "notifications",
        sa.Column("activity_id", UUID(as_uuid=True), nullable=True),
    )
    op.create_foreign_key(
        "fk_notifications_activity_id",
        "notifications", "activities",
        ["activity_id"], ["id"],
        ondelete="SET NULL",
    )
    # The reminder sweep looks up (activity, type) before sending
    op.create_index(
        "ix_notifications_activity_type", "notifications", ["activity_id", "type"],
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_activity_type", table_name="notifications")
    op.drop_constraint(
        "fk_notifications_activity_id", "notifications", type_="foreignkey",
    )
    op.drop_column("notifications", "activity_id")
