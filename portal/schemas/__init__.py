"""Pydantic schemas for request/response validation."""

from portal.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingResultRead,
    PaymentCreate,
    SpecialtyRead,
    TreatmentAvailabilityRead,
)
from portal.schemas.user import (
    AdminCheckResponse,
    DoctorCreate,
    DoctorRead,
    TokenResponse,
    UserCreate,
    UserRead,
)

__all__ = [
    "TreatmentAvailabilityRead",
    "SpecialtyRead",
    "BookingCreate",
    "BookingRead",
    "BookingResultRead",
    "PaymentCreate",
    "TokenResponse",
    "UserCreate",
    "UserRead",
    "AdminCheckResponse",
    "DoctorCreate",
    "DoctorRead",
]
