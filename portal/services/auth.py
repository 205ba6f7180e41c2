"""User registry and token issuance."""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.booking.ledger import store_errors
from portal.core.security import create_access_token
from portal.models.user import User, UserRole

logger = logging.getLogger(__name__)


class AuthService:
    """Service for portal users, roles and access tokens."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email address."""
        with store_errors("user lookup"):
            result = await self.session.execute(
                select(User).where(User.email == email.lower())
            )
            return result.scalar_one_or_none()

    async def issue_token(self, email: str) -> str | None:
        """Issue an access token for a registered email.

        Returns:
            JWT string, or None when no user has this email
        """
        user = await self.get_user_by_email(email)
        if not user:
            return None

        return create_access_token(email=user.email)

    async def register_user(self, email: str, name: str | None = None) -> tuple[User, bool]:
        """Register a user, returning the existing record on repeat sign-ups.

        Returns:
            (user, created) tuple
        """
        existing = await self.get_user_by_email(email)
        if existing:
            return existing, False

        user = User(email=email.lower(), name=name)
        with store_errors("user insert"):
            self.session.add(user)
            try:
                await self.session.commit()
            except IntegrityError:
                # Concurrent sign-up for the same email won the insert
                await self.session.rollback()
                existing = await self.get_user_by_email(email)
                if existing is None:
                    raise
                return existing, False
            await self.session.refresh(user)

        logger.info(f"Registered user {user.email}")
        return user, True

    async def list_users(self) -> Sequence[User]:
        """List all users."""
        with store_errors("user listing"):
            result = await self.session.execute(select(User).order_by(User.created_at))
            return result.scalars().all()

    async def make_admin(self, user_id: str) -> User | None:
        """Grant the admin role to a user by id."""
        try:
            UUID(user_id)
        except ValueError:
            return None

        with store_errors("role update"):
            result = await self.session.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
            if not user:
                return None

            user.role = UserRole.ADMIN.value
            await self.session.commit()
            await self.session.refresh(user)

        logger.warning(f"Granted admin role to {user.email}")
        return user

    async def is_admin(self, email: str) -> bool:
        """Check whether the user with this email is an admin."""
        user = await self.get_user_by_email(email)
        return bool(user and user.is_admin)
