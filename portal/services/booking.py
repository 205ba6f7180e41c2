"""Booking service: availability queries and booking admission.

Composes the slot catalog, booking ledger, availability calculator and
conflict guard into the operations the API exposes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from portal.booking.availability import (
    AvailabilityCalculator,
    ClientComputedAvailability,
    StoreComputedAvailability,
    TreatmentAvailability,
)
from portal.booking.errors import BookingRejected
from portal.booking.guard import BookingConflictGuard
from portal.booking.ledger import BookingLedger, SlotCatalog, SqlBookingLedger, SqlSlotCatalog
from portal.core.config import Settings, settings
from portal.models.booking import Booking, Payment

logger = logging.getLogger(__name__)


class AvailabilityStrategy(str, Enum):
    """Where the availability difference is computed."""

    CLIENT = "client"
    STORE = "store"


@dataclass
class BookingResult:
    """Answer to a booking attempt.

    Rejections are ordinary results, not errors: `acknowledged` is False and
    `message` explains why.
    """

    acknowledged: bool
    id: str | None = None
    message: str | None = None
    reason: str | None = None


class BookingService:
    """Service for availability and bookings."""

    def __init__(
        self,
        catalog: SlotCatalog,
        ledger: BookingLedger,
        calculator: AvailabilityCalculator | None = None,
        guard: BookingConflictGuard | None = None,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self.calculator = calculator or ClientComputedAvailability(catalog, ledger)
        self.guard = guard or BookingConflictGuard(ledger, catalog)

    @classmethod
    def from_session(
        cls,
        session: AsyncSession,
        strategy: AvailabilityStrategy = AvailabilityStrategy.CLIENT,
        config: Settings = settings,
    ) -> "BookingService":
        """Wire the SQL-backed catalog and ledger for a request session."""
        catalog = SqlSlotCatalog(session)
        ledger = SqlBookingLedger(session)

        if strategy == AvailabilityStrategy.STORE:
            calculator: AvailabilityCalculator = StoreComputedAvailability(session)
        else:
            calculator = ClientComputedAvailability(catalog, ledger)

        guard = BookingConflictGuard(
            ledger,
            catalog,
            validate_references=config.validate_booking_references,
            enforce_slot_exclusivity=config.enforce_slot_exclusivity,
        )
        return cls(catalog, ledger, calculator, guard)

    async def get_availability(self, appointment_date: str | None) -> list[TreatmentAvailability]:
        """List remaining slots of every treatment on a date."""
        return await self.calculator.for_date(appointment_date)

    async def create_booking(
        self,
        email: str,
        appointment_date: str,
        treatment: str,
        slot: str,
        patient_name: str | None = None,
        phone: str | None = None,
        price: float | None = None,
    ) -> BookingResult:
        """Attempt to book a slot.

        Raises:
            DataUnavailable: If the ledger cannot be read or written
        """
        candidate = Booking(
            email=email,
            appointment_date=appointment_date,
            treatment=treatment,
            slot=slot,
            patient_name=patient_name,
            phone=phone,
            price=price,
            paid=False,
        )

        try:
            admission = await self.guard.admit(candidate)
        except BookingRejected as e:
            logger.info(
                f"Booking rejected ({e.reason}): {e.message}",
                extra={"email": email, "treatment": treatment, "appointment_date": appointment_date},
            )
            return BookingResult(acknowledged=False, message=e.message, reason=e.reason)

        return BookingResult(acknowledged=admission.acknowledged, id=admission.booking_id)

    async def list_bookings(self, email: str) -> Sequence[Booking]:
        """List a patient's bookings."""
        return await self.ledger.list_by_email(email)

    async def get_booking(self, booking_id: str) -> Booking | None:
        """Get a booking by id, or None when it does not exist."""
        return await self.ledger.get(booking_id)

    async def record_payment(
        self,
        booking_id: str,
        transaction_id: str,
        email: str | None = None,
        price: float | None = None,
    ) -> Booking | None:
        """Record a captured payment and mark the booking paid."""
        payment = Payment(
            booking_id=booking_id,
            transaction_id=transaction_id,
            email=email,
            price=price,
        )
        booking = await self.ledger.record_payment(payment)

        if booking:
            logger.info(
                f"Payment {transaction_id} recorded",
                extra={"booking_id": booking_id},
            )
        return booking

    async def list_specialties(self) -> list[str]:
        """List treatment names in catalog order."""
        options = await self.catalog.list_options()
        return [option.name for option in options]
