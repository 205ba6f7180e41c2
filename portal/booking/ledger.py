"""Data-access interfaces for the slot catalog and the booking ledger.

The engine only talks to these interfaces; the SQL implementations below
are what the API wires in, and tests substitute in-memory fakes.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Sequence
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.booking.errors import DataUnavailable, DuplicateBooking
from portal.models.booking import Booking, Payment
from portal.models.catalog import TreatmentOption

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate store failures into DataUnavailable.

    Integrity violations pass through untouched; callers decide what a
    constraint violation means.
    """
    try:
        yield
    except IntegrityError:
        raise
    except (SQLAlchemyError, OSError) as exc:
        logger.error(f"Data store failure during {operation}: {exc}")
        raise DataUnavailable(f"Data store unavailable ({operation})") from exc


class SlotCatalog(ABC):
    """Read-only view of the treatment catalog."""

    @abstractmethod
    async def list_options(self) -> Sequence[TreatmentOption]:
        """Return every treatment option in catalog order."""

    @abstractmethod
    async def get_option(self, name: str) -> TreatmentOption | None:
        """Return the treatment option with this name, if any."""


class BookingLedger(ABC):
    """Authoritative record of accepted bookings."""

    @abstractmethod
    async def find_by_date(self, appointment_date: str | None) -> Sequence[Booking]:
        """Return all bookings whose date equals `appointment_date`."""

    @abstractmethod
    async def find_for_patient(
        self,
        email: str,
        appointment_date: str,
        treatment: str,
    ) -> Sequence[Booking]:
        """Return bookings matching the (email, date, treatment) triple."""

    @abstractmethod
    async def find_slot_holders(
        self,
        appointment_date: str,
        treatment: str,
        slot: str,
    ) -> Sequence[Booking]:
        """Return bookings already holding this slot."""

    @abstractmethod
    async def append(self, booking: Booking) -> Booking:
        """Persist a new booking and return it with its id assigned.

        Raises:
            DuplicateBooking: If storage rejects the (email, date, treatment) triple
        """

    @abstractmethod
    async def get(self, booking_id: str) -> Booking | None:
        """Return the booking with this id, or None."""

    @abstractmethod
    async def list_by_email(self, email: str) -> Sequence[Booking]:
        """Return every booking made by this patient."""

    @abstractmethod
    async def record_payment(self, payment: Payment) -> Booking | None:
        """Store a payment and mark its booking paid.

        Returns None (and stores nothing) when the booking does not exist.
        """


class SqlSlotCatalog(SlotCatalog):
    """Slot catalog backed by the treatment_options tables."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_options(self) -> Sequence[TreatmentOption]:
        with store_errors("catalog read"):
            result = await self.session.execute(
                select(TreatmentOption).order_by(
                    TreatmentOption.display_order,
                    TreatmentOption.name,
                )
            )
            return result.scalars().all()

    async def get_option(self, name: str) -> TreatmentOption | None:
        with store_errors("catalog lookup"):
            result = await self.session.execute(
                select(TreatmentOption).where(TreatmentOption.name == name)
            )
            return result.scalar_one_or_none()


class SqlBookingLedger(BookingLedger):
    """Booking ledger backed by the bookings table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_date(self, appointment_date: str | None) -> Sequence[Booking]:
        # A missing date compiles to IS NULL, which no booking satisfies
        with store_errors("ledger read"):
            result = await self.session.execute(
                select(Booking).where(Booking.appointment_date == appointment_date)
            )
            return result.scalars().all()

    async def find_for_patient(
        self,
        email: str,
        appointment_date: str,
        treatment: str,
    ) -> Sequence[Booking]:
        with store_errors("duplicate check"):
            result = await self.session.execute(
                select(Booking).where(
                    Booking.email == email,
                    Booking.appointment_date == appointment_date,
                    Booking.treatment == treatment,
                )
            )
            return result.scalars().all()

    async def find_slot_holders(
        self,
        appointment_date: str,
        treatment: str,
        slot: str,
    ) -> Sequence[Booking]:
        with store_errors("slot check"):
            result = await self.session.execute(
                select(Booking).where(
                    Booking.appointment_date == appointment_date,
                    Booking.treatment == treatment,
                    Booking.slot == slot,
                )
            )
            return result.scalars().all()

    async def append(self, booking: Booking) -> Booking:
        if booking.id is None:
            booking.id = str(uuid4())

        with store_errors("ledger append"):
            self.session.add(booking)
            try:
                await self.session.commit()
            except IntegrityError as exc:
                await self.session.rollback()
                raise DuplicateBooking(booking.appointment_date) from exc

            await self.session.refresh(booking)

        return booking

    async def get(self, booking_id: str) -> Booking | None:
        if not _is_uuid(booking_id):
            return None

        with store_errors("booking lookup"):
            result = await self.session.execute(
                select(Booking).where(Booking.id == booking_id)
            )
            return result.scalar_one_or_none()

    async def list_by_email(self, email: str) -> Sequence[Booking]:
        with store_errors("booking listing"):
            result = await self.session.execute(
                select(Booking)
                .where(Booking.email == email)
                .order_by(Booking.appointment_date, Booking.created_at)
            )
            return result.scalars().all()

    async def record_payment(self, payment: Payment) -> Booking | None:
        booking = await self.get(payment.booking_id)
        if not booking:
            return None

        with store_errors("payment update"):
            booking.paid = True
            booking.transaction_id = payment.transaction_id
            self.session.add(payment)
            await self.session.commit()
            await self.session.refresh(booking)

        return booking


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except (TypeError, ValueError):
        return False
    return True
