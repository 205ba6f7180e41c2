"""Booking and payment endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from portal.api.deps import CurrentEmail, DbSession
from portal.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingResultRead,
    PaymentCreate,
)
from portal.services.booking import BookingService

router = APIRouter()


@router.get(
    "/bookings",
    response_model=list[BookingRead],
)
async def list_bookings(
    email: CurrentEmail,
    session: DbSession,
    requested_email: str | None = Query(None, alias="email"),
) -> list[BookingRead]:
    """List the caller's own bookings."""
    if requested_email is None or requested_email.lower() != email.lower():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="forbidden access",
        )

    service = BookingService.from_session(session)
    bookings = await service.list_bookings(email.lower())

    return [BookingRead.model_validate(b) for b in bookings]


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingRead,
)
async def get_booking(
    booking_id: str,
    session: DbSession,
) -> BookingRead:
    """Get a booking by id (used by the payment page)."""
    service = BookingService.from_session(session)
    booking = await service.get_booking(booking_id)

    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )

    return BookingRead.model_validate(booking)


@router.post(
    "/bookings",
    response_model=BookingResultRead,
)
async def create_booking(
    request: BookingCreate,
    session: DbSession,
) -> BookingResultRead:
    """Book a slot.

    A conflicting booking is answered with `acknowledged: false` and a
    message rather than an error status.
    """
    service = BookingService.from_session(session)
    result = await service.create_booking(
        email=request.email,
        appointment_date=request.appointment_date,
        treatment=request.treatment,
        slot=request.slot,
        patient_name=request.patient_name,
        phone=request.phone,
        price=request.price,
    )

    return BookingResultRead.model_validate(result)


@router.post(
    "/payments",
    response_model=BookingRead,
)
async def record_payment(
    request: PaymentCreate,
    session: DbSession,
) -> BookingRead:
    """Record a captured payment and mark its booking paid."""
    service = BookingService.from_session(session)
    booking = await service.record_payment(
        booking_id=request.booking_id,
        transaction_id=request.transaction_id,
        email=request.email,
        price=request.price,
    )

    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )

    return BookingRead.model_validate(booking)
