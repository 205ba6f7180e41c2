"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from portal.api.v1 import appointments, bookings, doctors, health, users

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Availability
api_router.include_router(
    appointments.router,
    tags=["appointments"],
)

# Bookings and payments
api_router.include_router(
    bookings.router,
    tags=["bookings"],
)

# Users, tokens and roles
api_router.include_router(
    users.router,
    tags=["users"],
)

# Doctor roster
api_router.include_router(
    doctors.router,
    prefix="/doctors",
    tags=["doctors"],
)
