"""Availability, booking and payment schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from portal.schemas.user import LenientEmail

# Largest amount a Numeric(10, 2) price column holds
MAX_PRICE = 99_999_999.99


class TreatmentAvailabilityRead(BaseModel):
    """Remaining slots of one treatment on the requested date."""

    name: str
    price: float
    slots: list[str]

    model_config = {"from_attributes": True}


class SpecialtyRead(BaseModel):
    """Treatment name only."""

    name: str


class BookingCreate(BaseModel):
    """Request to book a slot."""

    email: LenientEmail
    appointment_date: str = Field(min_length=1, max_length=50)
    treatment: str = Field(min_length=1, max_length=150)
    slot: str = Field(min_length=1, max_length=50)
    patient_name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    price: float | None = Field(default=None, ge=0, le=MAX_PRICE)


class BookingResultRead(BaseModel):
    """Outcome of a booking attempt."""

    acknowledged: bool
    id: str | None = None
    message: str | None = None
    reason: str | None = None

    model_config = {"from_attributes": True}


class BookingRead(BaseModel):
    """Stored booking."""

    id: str
    email: str
    appointment_date: str
    treatment: str
    slot: str
    patient_name: str | None
    phone: str | None
    price: float | None
    paid: bool
    transaction_id: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentCreate(BaseModel):
    """Captured payment reported by the payment provider flow."""

    booking_id: str
    transaction_id: str = Field(min_length=1, max_length=255)
    email: LenientEmail | None = None
    price: float | None = Field(default=None, ge=0, le=MAX_PRICE)
