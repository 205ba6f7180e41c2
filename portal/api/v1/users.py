"""User registry, token and role endpoints."""

from fastapi import APIRouter, HTTPException, Query, Response, status

from portal.api.deps import AdminEmail, DbSession
from portal.schemas.user import AdminCheckResponse, TokenResponse, UserCreate, UserRead
from portal.services.auth import AuthService

router = APIRouter()


@router.get(
    "/jwt",
    response_model=TokenResponse,
    summary="Issue access token",
)
async def issue_token(
    session: DbSession,
    email: str = Query(...),
) -> TokenResponse:
    """Issue an access token for a registered email."""
    token = await AuthService(session).issue_token(email)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="forbidden",
        )

    return TokenResponse(access_token=token)


@router.post(
    "/users",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    request: UserCreate,
    session: DbSession,
    response: Response,
) -> UserRead:
    """Register a user after sign-up; repeat sign-ups return the stored record."""
    user, created = await AuthService(session).register_user(
        email=request.email,
        name=request.name,
    )

    if not created:
        response.status_code = status.HTTP_200_OK

    return UserRead.model_validate(user)


@router.get(
    "/users",
    response_model=list[UserRead],
)
async def list_users(session: DbSession) -> list[UserRead]:
    """List all users."""
    users = await AuthService(session).list_users()
    return [UserRead.model_validate(u) for u in users]


@router.put(
    "/users/admin/{user_id}",
    response_model=UserRead,
)
async def make_admin(
    user_id: str,
    admin: AdminEmail,
    session: DbSession,
) -> UserRead:
    """Grant the admin role to a user (admins only)."""
    user = await AuthService(session).make_admin(user_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserRead.model_validate(user)


@router.get(
    "/users/admin/{email}",
    response_model=AdminCheckResponse,
)
async def check_admin(email: str, session: DbSession) -> AdminCheckResponse:
    """Tell whether an email belongs to an admin."""
    return AdminCheckResponse(is_admin=await AuthService(session).is_admin(email))
