"""Initial schema: slot catalog, booking ledger, users, doctors, payments.

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database schema."""

    # ========================================================================
    # SLOT CATALOG
    # ========================================================================

    op.create_table(
        "treatment_options",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_treatment_options"),
        sa.CheckConstraint("price >= 0", name="ck_treatment_options_price_non_negative"),
    )
    op.create_index(
        "ix_treatment_options_name", "treatment_options", ["name"], unique=True
    )

    op.create_table(
        "treatment_slots",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("treatment_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("label", sa.String(50), nullable=False),
        sa.ForeignKeyConstraint(
            ["treatment_id"],
            ["treatment_options.id"],
            name="fk_treatment_slots_treatment_id_treatment_options",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_treatment_slots"),
        sa.UniqueConstraint(
            "treatment_id", "position", name="uq_treatment_slots_position"
        ),
    )
    op.create_index(
        "ix_treatment_slots_treatment_id", "treatment_slots", ["treatment_id"]
    )

    # ========================================================================
    # BOOKING LEDGER
    # ========================================================================

    op.create_table(
        "bookings",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("treatment", sa.String(150), nullable=False),
        sa.Column("appointment_date", sa.String(50), nullable=False),
        sa.Column("slot", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("patient_name", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("transaction_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_bookings"),
        # Closes the check-then-insert race on duplicate bookings
        sa.UniqueConstraint(
            "email",
            "appointment_date",
            "treatment",
            name="uq_bookings_email_date_treatment",
        ),
    )
    op.create_index("ix_bookings_email", "bookings", ["email"])
    op.create_index(
        "ix_bookings_date_treatment", "bookings", ["appointment_date", "treatment"]
    )

    op.create_table(
        "payments",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("booking_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("transaction_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.id"],
            name="fk_payments_booking_id_bookings",
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_payments"),
    )
    op.create_index("ix_payments_booking_id", "payments", ["booking_id"])

    # ========================================================================
    # USERS AND DOCTOR ROSTER
    # ========================================================================

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("role", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "doctors",
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("specialty", sa.String(150), nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_doctors"),
    )
    op.create_index("ix_doctors_email", "doctors", ["email"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("doctors")
    op.drop_table("users")
    op.drop_table("payments")
    op.drop_table("bookings")
    op.drop_table("treatment_slots")
    op.drop_table("treatment_options")
