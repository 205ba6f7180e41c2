"""Appointment option (availability) endpoints.

`/appointment-options` computes availability in process;
`/v2/appointment-options` lets the database compute it. Both return the same
data for the same catalog and ledger.
"""

from fastapi import APIRouter, Query

from portal.api.deps import DbSession
from portal.schemas.booking import SpecialtyRead, TreatmentAvailabilityRead
from portal.services.booking import AvailabilityStrategy, BookingService

router = APIRouter()


@router.get(
    "/appointment-options",
    response_model=list[TreatmentAvailabilityRead],
    summary="Available slots per treatment",
)
async def get_appointment_options(
    session: DbSession,
    date: str | None = Query(None, description="Appointment date key"),
) -> list[TreatmentAvailabilityRead]:
    """List every treatment with the slots still free on `date`."""
    service = BookingService.from_session(session, AvailabilityStrategy.CLIENT)
    availability = await service.get_availability(date)

    return [TreatmentAvailabilityRead.model_validate(a) for a in availability]


@router.get(
    "/v2/appointment-options",
    response_model=list[TreatmentAvailabilityRead],
    summary="Available slots per treatment (database-computed)",
)
async def get_appointment_options_v2(
    session: DbSession,
    date: str | None = Query(None, description="Appointment date key"),
) -> list[TreatmentAvailabilityRead]:
    """Same as `/appointment-options`, with the difference computed in SQL."""
    service = BookingService.from_session(session, AvailabilityStrategy.STORE)
    availability = await service.get_availability(date)

    return [TreatmentAvailabilityRead.model_validate(a) for a in availability]


@router.get(
    "/appointment-specialty",
    response_model=list[SpecialtyRead],
    summary="Treatment names",
)
async def get_appointment_specialties(session: DbSession) -> list[SpecialtyRead]:
    """List treatment names, used to pick a doctor's specialty."""
    service = BookingService.from_session(session)
    names = await service.list_specialties()

    return [SpecialtyRead(name=name) for name in names]
