"""Database initialization utilities."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.db.base import Base
from portal.db.session import engine
from portal.models.catalog import TreatmentOption, TreatmentSlot

logger = logging.getLogger(__name__)

DEFAULT_SLOTS = [
    "08.00 AM - 08.30 AM",
    "08.30 AM - 09.00 AM",
    "09.00 AM - 09.30 AM",
    "09.30 AM - 10.00 AM",
    "10.00 AM - 10.30 AM",
    "10.30 AM - 11.00 AM",
    "11.00 AM - 11.30 AM",
    "11.30 AM - 12.00 PM",
    "01.00 PM - 01.30 PM",
    "01.30 PM - 02.00 PM",
]

# (name, price) in catalog order
DEFAULT_TREATMENTS = [
    ("Teeth Orthodontics", 99),
    ("Cosmetic Dentistry", 99),
    ("Teeth Cleaning", 99),
    ("Cavity Protection", 99),
    ("Pediatric Dental", 99),
    ("Oral Surgery", 99),
]


async def create_tables() -> None:
    """Create all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


def build_treatment(name: str, price: float, slots: list[str], display_order: int = 0) -> TreatmentOption:
    """Build a treatment option with its slot rows."""
    return TreatmentOption(
        name=name,
        price=price,
        display_order=display_order,
        slot_rows=[
            TreatmentSlot(position=position, label=label)
            for position, label in enumerate(slots)
        ],
    )


async def seed_catalog(session: AsyncSession) -> int:
    """Seed the default treatment catalog when the catalog is empty.

    Returns:
        Number of treatments created
    """
    result = await session.execute(select(TreatmentOption.id).limit(1))
    if result.first():
        logger.info("Treatment catalog already seeded, skipping")
        return 0

    for order, (name, price) in enumerate(DEFAULT_TREATMENTS):
        session.add(build_treatment(name, price, DEFAULT_SLOTS, display_order=order))

    await session.commit()
    logger.info(f"Seeded {len(DEFAULT_TREATMENTS)} treatments")
    return len(DEFAULT_TREATMENTS)


async def init_db(session: AsyncSession) -> None:
    """Create tables and seed reference data (development only)."""
    await create_tables()
    await seed_catalog(session)
    logger.info("Database initialization complete")
