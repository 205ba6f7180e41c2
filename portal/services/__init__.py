"""Business logic services."""

from portal.services.auth import AuthService
from portal.services.booking import AvailabilityStrategy, BookingResult, BookingService
from portal.services.doctors import DoctorService

__all__ = [
    "AuthService",
    "AvailabilityStrategy",
    "BookingResult",
    "BookingService",
    "DoctorService",
]
