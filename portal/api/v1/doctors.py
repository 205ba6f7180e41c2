"""Doctor roster endpoints (admins only)."""

from fastapi import APIRouter, HTTPException, status

from portal.api.deps import AdminEmail, DbSession
from portal.schemas.user import DoctorCreate, DoctorRead
from portal.services.doctors import DoctorService

router = APIRouter()


@router.post(
    "",
    response_model=DoctorRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_doctor(
    request: DoctorCreate,
    admin: AdminEmail,
    session: DbSession,
) -> DoctorRead:
    """Add a doctor to the roster."""
    doctor = await DoctorService(session).add_doctor(
        name=request.name,
        email=request.email,
        specialty=request.specialty,
        image=request.image,
    )
    return DoctorRead.model_validate(doctor)


@router.get(
    "",
    response_model=list[DoctorRead],
)
async def list_doctors(admin: AdminEmail, session: DbSession) -> list[DoctorRead]:
    """List the doctor roster."""
    doctors = await DoctorService(session).list_doctors()
    return [DoctorRead.model_validate(d) for d in doctors]


@router.delete(
    "/{doctor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_doctor(
    doctor_id: str,
    admin: AdminEmail,
    session: DbSession,
) -> None:
    """Remove a doctor from the roster."""
    if not await DoctorService(session).remove_doctor(doctor_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Doctor not found",
        )
