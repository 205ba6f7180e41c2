"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from portal.core.security import create_access_token
from portal.db.base import Base
from portal.db.init_db import build_treatment
from portal.db.session import get_db
from portal.main import app
from portal.models.booking import Booking
from portal.models.catalog import TreatmentOption
from portal.models.user import User, UserRole

# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create API client with the database dependency overridden."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def braces_catalog(async_session: AsyncSession) -> list[TreatmentOption]:
    """Catalog with Braces and Cleaning treatments."""
    options = [
        build_treatment("Braces", 120, ["9AM", "10AM", "11AM"], display_order=0),
        build_treatment("Cleaning", 60, ["9AM", "10AM"], display_order=1),
    ]
    async_session.add_all(options)
    await async_session.commit()
    return options


@pytest.fixture
async def braces_booking(async_session: AsyncSession, braces_catalog) -> Booking:
    """Existing booking of Braces at 10AM on 2024-01-05 by a@x.com."""
    booking = Booking(
        treatment="Braces",
        appointment_date="2024-01-05",
        slot="10AM",
        email="a@x.com",
    )
    async_session.add(booking)
    await async_session.commit()
    await async_session.refresh(booking)
    return booking


@pytest.fixture
async def test_user(async_session: AsyncSession) -> User:
    """Create a regular patient user."""
    user = User(email="patient@example.com", name="Test Patient")
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    """Create an admin user."""
    user = User(email="admin@example.com", name="Admin", role=UserRole.ADMIN.value)
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict[str, str]:
    """Authorization headers for the patient user."""
    token = create_access_token(email=test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict[str, str]:
    """Authorization headers for the admin user."""
    token = create_access_token(email=admin_user.email)
    return {"Authorization": f"Bearer {token}"}
