"""Create the treatment catalog (treatment options and their slots)."""

import asyncio

from portal.db.init_db import create_tables, seed_catalog
from portal.db.session import AsyncSessionLocal


async def create_catalog_data():
    """Create tables if needed and seed the default treatment catalog."""
    await create_tables()

    async with AsyncSessionLocal() as session:
        created = await seed_catalog(session)

    if created:
        print(f"Created {created} treatments")
    else:
        print("Treatment catalog already exists, skipping...")


if __name__ == "__main__":
    asyncio.run(create_catalog_data())
