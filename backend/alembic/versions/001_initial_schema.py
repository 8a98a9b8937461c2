"""Initial schema — shelters, breeds, users, animals, requests, activities, fosterings.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum values stored as VARCHAR (db/types.enum_column)
_ENUM = sa.String(32)


def upgrade() -> None:
    op.create_table(
        "shelters",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("street", sa.String(200), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("postal_code", sa.String(8), nullable=False),
        sa.Column("phone", sa.String(9), nullable=False),
        sa.Column("nif", sa.String(9), nullable=False),
        sa.Column("opening_time", sa.Time, nullable=False),
        sa.Column("closing_time", sa.Time, nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "breeds",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.String(500), nullable=True),
    )

    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("shelter_id", UUID(as_uuid=True), sa.ForeignKey("shelters.id"), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column("street", sa.String(200), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("postal_code", sa.String(8), nullable=True),
        sa.Column("phone_number", sa.String(9), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "animals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("animal_state", _ENUM, nullable=False, server_default="Available"),
        sa.Column("description", sa.String(250), nullable=True),
        sa.Column("species", _ENUM, nullable=False),
        sa.Column("size", _ENUM, nullable=False),
        sa.Column("sex", _ENUM, nullable=False),
        sa.Column("colour", sa.String(50), nullable=False),
        sa.Column("birth_date", sa.Date, nullable=False),
        sa.Column("sterilized", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("features", sa.Text, nullable=True),
        sa.Column("shelter_id", UUID(as_uuid=True), sa.ForeignKey("shelters.id"), nullable=False),
        sa.Column("breed_id", UUID(as_uuid=True), sa.ForeignKey("breeds.id"), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("ownership_start_date", sa.DateTime, nullable=True),
        sa.Column("ownership_end_date", sa.DateTime, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_animals_shelter_state", "animals", ["shelter_id", "animal_state"])

    op.create_table(
        "images",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "animal_id", UUID(as_uuid=True),
            sa.ForeignKey("animals.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column(
            "shelter_id", UUID(as_uuid=True),
            sa.ForeignKey("shelters.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("public_id", sa.String(200), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_principal", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "ownership_requests",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "animal_id", UUID(as_uuid=True),
            sa.ForeignKey("animals.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", _ENUM, nullable=False, server_default="Pending"),
        sa.Column("request_info", sa.String(500), nullable=True),
        sa.Column("requested_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("approved_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "activities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "animal_id", UUID(as_uuid=True),
            sa.ForeignKey("animals.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("type", _ENUM, nullable=False),
        sa.Column("status", _ENUM, nullable=False, server_default="Active"),
        sa.Column("start_date", sa.DateTime, nullable=False),
        sa.Column("end_date", sa.DateTime, nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("animal_id", "start_date", name="uq_activities_animal_start"),
    )

    op.create_table(
        "activity_slots",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("shelter_id", UUID(as_uuid=True), sa.ForeignKey("shelters.id"), nullable=False),
        sa.Column(
            "activity_id", UUID(as_uuid=True),
            sa.ForeignKey("activities.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("start_date", sa.DateTime, nullable=False),
        sa.Column("end_date", sa.DateTime, nullable=False),
        sa.Column("status", _ENUM, nullable=False),
        sa.Column("type", _ENUM, nullable=False),
    )
    op.create_index(
        "ix_activity_slots_shelter_window", "activity_slots",
        ["shelter_id", "start_date", "end_date"],
    )

    op.create_table(
        "fosterings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "animal_id", UUID(as_uuid=True),
            sa.ForeignKey("animals.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", _ENUM, nullable=False, server_default="Active"),
        sa.Column("start_date", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("end_date", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )

    op.create_table(
        "favorites",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "animal_id", UUID(as_uuid=True),
            sa.ForeignKey("animals.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=True),
        sa.UniqueConstraint("user_id", "animal_id", name="uq_favorites_user_animal"),
    )

    op.create_table(
        "notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("type", _ENUM, nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("read_at", sa.DateTime, nullable=True),
        sa.Column(
            "animal_id", UUID(as_uuid=True),
            sa.ForeignKey("animals.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "ownership_request_id", UUID(as_uuid=True),
            sa.ForeignKey("ownership_requests.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_notifications_user_created", "notifications", ["user_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_user_created", table_name="notifications")
    op.drop_table("notifications")
    op.drop_table("favorites")
    op.drop_table("fosterings")
    op.drop_index("ix_activity_slots_shelter_window", table_name="activity_slots")
    op.drop_table("activity_slots")
    op.drop_table("activities")
    op.drop_table("ownership_requests")
    op.drop_table("images")
    op.drop_index("ix_animals_shelter_state", table_name="animals")
    op.drop_table("animals")
    op.drop_table("users")
    op.drop_table("breeds")
    op.drop_table("shelters")
