"""User, token and doctor schemas."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field


def validate_email_lenient(v: str) -> str:
    """Validate email with lenient rules that allow .local domains for testing."""
    if not v or "@" not in v:
        raise ValueError("Invalid email address")
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    if not re.match(pattern, v):
        raise ValueError("Invalid email address format")
    return v.lower()


LenientEmail = Annotated[str, AfterValidator(validate_email_lenient)]


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"


class UserCreate(BaseModel):
    """User sign-up record."""

    email: LenientEmail
    name: str | None = Field(default=None, max_length=200)


class UserRead(BaseModel):
    """Stored user."""

    id: str
    email: str
    name: str | None
    role: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminCheckResponse(BaseModel):
    """Whether an email belongs to an admin."""

    is_admin: bool


class DoctorCreate(BaseModel):
    """Request to add a doctor to the roster."""

    name: str = Field(min_length=1, max_length=200)
    email: LenientEmail
    specialty: str = Field(min_length=1, max_length=150)
    image: str | None = Field(default=None, max_length=500)


class DoctorRead(BaseModel):
    """Doctor on the roster."""

    id: str
    name: str
    email: str
    specialty: str
    image: str | None

    model_config = {"from_attributes": True}
