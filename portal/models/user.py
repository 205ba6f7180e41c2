"""User and doctor roster models."""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base, TimestampMixin


class UserRole(str, Enum):
    """Roles a portal user can hold."""

    ADMIN = "admin"


class User(Base, TimestampMixin):
    """Registered portal user, keyed by email."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )
    # None for ordinary patients
    role: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"


class Doctor(Base, TimestampMixin):
    """Doctor on the clinic roster."""

    __tablename__ = "doctors"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    # Matches a TreatmentOption name
    specialty: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    image: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Doctor {self.name}>"
