"""Slot availability calculation.

Availability for a date is each treatment's catalog slots minus the slots
already booked for that treatment on that date, in catalog order. Two
strategies compute it and must always agree:

- ClientComputedAvailability loads the catalog and the day's bookings and
  subtracts in process.
- StoreComputedAvailability pushes the join and the difference into a single
  SQL statement.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.booking.ledger import BookingLedger, SlotCatalog, store_errors
from portal.models.booking import Booking
from portal.models.catalog import TreatmentOption, TreatmentSlot

logger = logging.getLogger(__name__)


@dataclass
class TreatmentAvailability:
    """Remaining slots of one treatment on one date.

    Attributes:
        name: Treatment name
        price: Treatment price
        slots: Unbooked slot labels in catalog order
    """

    name: str
    price: float
    slots: list[str] = field(default_factory=list)


def remaining_slots(slots: Sequence[str], booked: Iterable[str]) -> list[str]:
    """Return `slots` without any label in `booked`, keeping catalog order.

    Examples:
        >>> remaining_slots(["9AM", "10AM", "11AM"], ["10AM"])
        ['9AM', '11AM']
    """
    taken = set(booked)
    return [slot for slot in slots if slot not in taken]


def group_booked_slots(bookings: Iterable[Booking]) -> dict[str, set[str]]:
    """Map treatment name to the set of slots booked for it."""
    booked: dict[str, set[str]] = defaultdict(set)
    for booking in bookings:
        booked[booking.treatment].add(booking.slot)
    return booked


class AvailabilityCalculator(ABC):
    """Computes remaining slots for every treatment on a date."""

    @abstractmethod
    async def for_date(self, appointment_date: str | None) -> list[TreatmentAvailability]:
        """Return availability for every treatment option in catalog order.

        Raises:
            DataUnavailable: If the catalog or ledger cannot be read
        """


class ClientComputedAvailability(AvailabilityCalculator):
    """Loads both collections and subtracts in process."""

    def __init__(self, catalog: SlotCatalog, ledger: BookingLedger):
        self.catalog = catalog
        self.ledger = ledger

    async def for_date(self, appointment_date: str | None) -> list[TreatmentAvailability]:
        options = await self.catalog.list_options()
        booked = group_booked_slots(await self.ledger.find_by_date(appointment_date))

        availability = []
        for option in options:
            slots = remaining_slots(option.slots, booked.get(option.name, ()))
            logger.debug(f"{appointment_date} {option.name} remaining={len(slots)}")
            availability.append(
                TreatmentAvailability(name=option.name, price=option.price, slots=slots)
            )

        return availability


class StoreComputedAvailability(AvailabilityCalculator):
    """Computes availability with one join in the database.

    Each treatment is outer-joined to those of its slots for which no booking
    exists on the date, so treatments with every slot taken still appear
    (with a single NULL slot row).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def build_query(self, appointment_date: str | None):
        """Build the availability statement for a date."""
        slot_taken = (
            select(Booking.id)
            .where(
                Booking.treatment == TreatmentOption.name,
                Booking.appointment_date == appointment_date,
                Booking.slot == TreatmentSlot.label,
            )
            .correlate(TreatmentOption, TreatmentSlot)
            .exists()
        )

        return (
            select(TreatmentOption.name, TreatmentOption.price, TreatmentSlot.label)
            .select_from(TreatmentOption)
            .outerjoin(
                TreatmentSlot,
                and_(
                    TreatmentSlot.treatment_id == TreatmentOption.id,
                    ~slot_taken,
                ),
            )
            .order_by(
                TreatmentOption.display_order,
                TreatmentOption.name,
                TreatmentSlot.position,
            )
        )

    async def for_date(self, appointment_date: str | None) -> list[TreatmentAvailability]:
        with store_errors("availability query"):
            result = await self.session.execute(self.build_query(appointment_date))
            rows = result.all()

        availability: dict[str, TreatmentAvailability] = {}
        for name, price, label in rows:
            entry = availability.get(name)
            if entry is None:
                entry = availability[name] = TreatmentAvailability(name=name, price=price)
            if label is not None:
                entry.slots.append(label)

        for entry in availability.values():
            logger.debug(f"{appointment_date} {entry.name} remaining={len(entry.slots)}")

        return list(availability.values())
