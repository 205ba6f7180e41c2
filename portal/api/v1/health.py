"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlalchemy import text

from portal.api.deps import DbSession
from portal.booking.ledger import store_errors

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns service health status",
)
async def health_check() -> HealthResponse:
    """Check if the service is up."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns 200 once the database answers, 503 otherwise",
)
async def readiness_check(session: DbSession) -> HealthResponse:
    """Check that the catalog and ledger store is reachable."""
    with store_errors("readiness probe"):
        await session.execute(text("SELECT 1"))

    return HealthResponse(status="ok")
