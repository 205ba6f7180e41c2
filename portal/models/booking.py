"""Booking ledger and payment models."""

from sqlalchemy import Boolean, ForeignKey, Index, Numeric, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    """An accepted reservation of one slot by one patient.

    `treatment` holds the treatment name rather than a foreign key; whether
    it and `slot` match the catalog is checked (optionally) at admission.
    """

    __tablename__ = "bookings"
    __table_args__ = (
        # One booking per patient, date and treatment
        UniqueConstraint(
            "email",
            "appointment_date",
            "treatment",
            name="uq_bookings_email_date_treatment",
        ),
        Index("ix_bookings_date_treatment", "appointment_date", "treatment"),
    )

    treatment: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    # Opaque, comparable date key (format decided at the API edge)
    appointment_date: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    slot: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    patient_name: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )
    phone: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
    )
    price: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=True,
    )

    # Written by the payment collaborator only
    paid: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    transaction_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Booking {self.treatment} {self.appointment_date} {self.slot}>"


class Payment(Base, TimestampMixin):
    """Captured payment recorded against a booking."""

    __tablename__ = "payments"

    booking_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("bookings.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    transaction_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    price: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Payment {self.transaction_id}>"
