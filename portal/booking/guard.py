"""Booking conflict guard.

Admits a candidate booking into the ledger unless the patient already holds
a booking for the same treatment on the same date. The pre-check gives the
patient a friendly rejection; the unique constraint on the bookings table is
what actually closes the race between two concurrent identical requests.

Slot capacity across different patients is not checked unless
`enforce_slot_exclusivity` is on, and catalog references are not checked
unless `validate_booking_references` is on.
"""

import logging
from dataclasses import dataclass

from portal.booking.errors import DuplicateBooking, InvalidReference, SlotUnavailable
from portal.booking.ledger import BookingLedger, SlotCatalog
from portal.models.booking import Booking

logger = logging.getLogger(__name__)


@dataclass
class Admission:
    """Outcome of a successful admission."""

    booking_id: str
    acknowledged: bool = True


class BookingConflictGuard:
    """Decides whether a candidate booking may enter the ledger."""

    def __init__(
        self,
        ledger: BookingLedger,
        catalog: SlotCatalog | None = None,
        validate_references: bool = False,
        enforce_slot_exclusivity: bool = False,
    ):
        if validate_references and catalog is None:
            raise ValueError("Reference validation needs a slot catalog")

        self.ledger = ledger
        self.catalog = catalog
        self.validate_references = validate_references
        self.enforce_slot_exclusivity = enforce_slot_exclusivity

    async def check_references(self, candidate: Booking) -> None:
        """Reject bookings naming an unknown treatment or slot."""
        option = await self.catalog.get_option(candidate.treatment)
        if option is None:
            raise InvalidReference(f"Unknown treatment '{candidate.treatment}'")
        if candidate.slot not in option.slots:
            raise InvalidReference(
                f"Slot '{candidate.slot}' is not offered for {candidate.treatment}"
            )

    async def check_slot_free(self, candidate: Booking) -> None:
        """Reject bookings for a slot someone else already holds."""
        holders = await self.ledger.find_slot_holders(
            candidate.appointment_date, candidate.treatment, candidate.slot
        )
        if holders:
            raise SlotUnavailable(
                f"{candidate.slot} on {candidate.appointment_date} is already booked"
            )

    async def check_duplicate(self, candidate: Booking) -> None:
        """Reject a second booking for the same (email, date, treatment)."""
        existing = await self.ledger.find_for_patient(
            candidate.email, candidate.appointment_date, candidate.treatment
        )
        if existing:
            raise DuplicateBooking(candidate.appointment_date)

    async def admit(self, candidate: Booking) -> Admission:
        """Check the candidate and append it to the ledger.

        Args:
            candidate: Unsaved booking

        Returns:
            Admission carrying the new booking id

        Raises:
            DuplicateBooking: Same patient, date and treatment already booked
            InvalidReference: Treatment or slot not in catalog (when validating)
            SlotUnavailable: Slot already held (when enforcing exclusivity)
            DataUnavailable: Ledger or catalog unreachable
        """
        if self.validate_references:
            await self.check_references(candidate)

        if self.enforce_slot_exclusivity:
            await self.check_slot_free(candidate)

        await self.check_duplicate(candidate)

        booking = await self.ledger.append(candidate)
        logger.info(
            f"Booking admitted: {booking.treatment} {booking.appointment_date} {booking.slot}",
            extra={"booking_id": booking.id, "email": booking.email},
        )
        return Admission(booking_id=booking.id)
