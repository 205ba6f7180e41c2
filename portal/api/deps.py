"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.security import decode_access_token
from portal.db.session import get_db
from portal.services.auth import AuthService

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_email(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Return the email carried by the bearer token.

    Raises:
        HTTPException: 401 without a token, 403 when the token is invalid
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("email"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="forbidden access",
        )

    return payload["email"]


async def require_admin(
    email: Annotated[str, Depends(get_current_email)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> str:
    """Allow the request only for admin users.

    Returns:
        The admin's email
    """
    if not await AuthService(session).is_admin(email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="forbidden access",
        )
    return email


# Type aliases for cleaner dependency injection
CurrentEmail = Annotated[str, Depends(get_current_email)]
AdminEmail = Annotated[str, Depends(require_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
