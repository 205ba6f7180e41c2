"""Slot availability and booking conflict engine."""

from portal.booking.availability import (
    AvailabilityCalculator,
    ClientComputedAvailability,
    StoreComputedAvailability,
    TreatmentAvailability,
    remaining_slots,
)
from portal.booking.errors import (
    BookingError,
    BookingRejected,
    DataUnavailable,
    DuplicateBooking,
    InvalidReference,
    SlotUnavailable,
)
from portal.booking.guard import Admission, BookingConflictGuard
from portal.booking.ledger import BookingLedger, SlotCatalog, SqlBookingLedger, SqlSlotCatalog

__all__ = [
    "AvailabilityCalculator",
    "ClientComputedAvailability",
    "StoreComputedAvailability",
    "TreatmentAvailability",
    "remaining_slots",
    "BookingError",
    "BookingRejected",
    "DataUnavailable",
    "DuplicateBooking",
    "InvalidReference",
    "SlotUnavailable",
    "Admission",
    "BookingConflictGuard",
    "BookingLedger",
    "SlotCatalog",
    "SqlBookingLedger",
    "SqlSlotCatalog",
]
