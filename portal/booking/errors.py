"""Errors raised by the availability and booking engine."""


class BookingError(Exception):
    """Base class for booking engine errors."""

    pass


class DataUnavailable(BookingError):
    """Raised when the catalog or ledger store cannot be reached.

    Never retried internally and never masked by an empty result.
    """

    pass


class BookingRejected(BookingError):
    """Base class for admission rejections shown to the patient."""

    reason = "rejected"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateBooking(BookingRejected):
    """Patient already holds a booking for this treatment on this date."""

    reason = "duplicate"

    def __init__(self, appointment_date: str | None):
        super().__init__(f"You already have a booking on {appointment_date}")
        self.appointment_date = appointment_date


class InvalidReference(BookingRejected):
    """Booking names a treatment or slot that is not in the catalog."""

    reason = "invalid_reference"


class SlotUnavailable(BookingRejected):
    """Requested slot is already held by another booking."""

    reason = "slot_unavailable"
