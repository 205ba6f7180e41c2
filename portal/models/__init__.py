"""Database models for the Doctors Portal."""

from portal.models.booking import Booking, Payment
from portal.models.catalog import TreatmentOption, TreatmentSlot
from portal.models.user import Doctor, User, UserRole

__all__ = [
    # Slot catalog
    "TreatmentOption",
    "TreatmentSlot",
    # Booking ledger
    "Booking",
    "Payment",
    # Users
    "User",
    "UserRole",
    "Doctor",
]
