"""Slot catalog models.

A treatment option is a named, priced service with an ordered list of
bookable slot labels. Slots live in their own table so availability can be
computed with a relational join against the booking ledger.
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.db.base import Base, TimestampMixin


class TreatmentOption(Base, TimestampMixin):
    """Bookable treatment with its price and slot catalog."""

    __tablename__ = "treatment_options"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
    )

    # Domain key referenced by Booking.treatment
    name: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        nullable=False,
        index=True,
    )
    price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        default=0,
        nullable=False,
    )
    # Catalog order (ties broken by name)
    display_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    slot_rows: Mapped[list["TreatmentSlot"]] = relationship(
        "TreatmentSlot",
        back_populates="treatment",
        order_by="TreatmentSlot.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def slots(self) -> list[str]:
        """Slot labels in catalog order."""
        return [row.label for row in self.slot_rows]

    def __repr__(self) -> str:
        return f"<TreatmentOption {self.name}>"


class TreatmentSlot(Base):
    """One labelled slot within a treatment's daily schedule."""

    __tablename__ = "treatment_slots"
    __table_args__ = (
        UniqueConstraint("treatment_id", "position", name="uq_treatment_slots_position"),
    )

    treatment_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("treatment_options.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    # e.g. "10:00 AM"; uniqueness within a treatment is not enforced
    label: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    treatment: Mapped["TreatmentOption"] = relationship(
        "TreatmentOption",
        back_populates="slot_rows",
    )

    def __repr__(self) -> str:
        return f"<TreatmentSlot {self.position}:{self.label}>"
