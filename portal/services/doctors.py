"""Doctor roster management."""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.booking.ledger import store_errors
from portal.models.user import Doctor


class DoctorService:
    """Service for the clinic's doctor roster."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_doctor(
        self,
        name: str,
        email: str,
        specialty: str,
        image: str | None = None,
    ) -> Doctor:
        """Add a doctor to the roster."""
        doctor = Doctor(name=name, email=email.lower(), specialty=specialty, image=image)

        with store_errors("doctor insert"):
            self.session.add(doctor)
            await self.session.commit()
            await self.session.refresh(doctor)

        return doctor

    async def list_doctors(self) -> Sequence[Doctor]:
        """List every doctor on the roster."""
        with store_errors("doctor listing"):
            result = await self.session.execute(select(Doctor).order_by(Doctor.name))
            return result.scalars().all()

    async def remove_doctor(self, doctor_id: str) -> bool:
        """Remove a doctor by id.

        Returns:
            True if a doctor was removed
        """
        try:
            UUID(doctor_id)
        except ValueError:
            return False

        with store_errors("doctor delete"):
            result = await self.session.execute(select(Doctor).where(Doctor.id == doctor_id))
            doctor = result.scalar_one_or_none()
            if not doctor:
                return False

            await self.session.delete(doctor)
            await self.session.commit()

        return True
