"""The in-process and database-computed availability must agree.

Every scenario is loaded into SQLite and answered by both strategies;
results are compared treatment by treatment, slot order included.
"""

import logging
import random
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.booking.availability import (
    ClientComputedAvailability,
    StoreComputedAvailability,
    TreatmentAvailability,
)
from portal.booking.errors import DataUnavailable
from portal.booking.ledger import SqlBookingLedger, SqlSlotCatalog
from portal.db.init_db import build_treatment
from portal.models.booking import Booking

SLOT_POOL = ["8AM", "9AM", "10AM", "11AM", "1PM", "2PM"]
DATE_POOL = ["2024-01-05", "2024-01-06", ""]
QUERY_DATES = ["2024-01-05", "2024-01-06", "", None, "2030-01-01"]


def strategies(session: AsyncSession):
    client = ClientComputedAvailability(SqlSlotCatalog(session), SqlBookingLedger(session))
    store = StoreComputedAvailability(session)
    return client, store


async def load_random_state(session: AsyncSession, seed: int) -> None:
    rng = random.Random(seed)

    names = [f"Treatment {i}" for i in range(rng.randint(0, 5))]
    for name in names:
        slots = rng.sample(SLOT_POOL, rng.randint(0, len(SLOT_POOL)))
        session.add(
            build_treatment(
                name,
                rng.choice([0, 49.5, 99]),
                slots,
                display_order=rng.randint(0, 2),
            )
        )

    for i in range(rng.randint(0, 15)):
        session.add(
            Booking(
                treatment=rng.choice(names + ["Not In Catalog"]),
                appointment_date=rng.choice(DATE_POOL),
                slot=rng.choice(SLOT_POOL + ["Off Catalog Slot"]),
                email=f"patient{i}@example.com",
            )
        )

    await session.commit()


class TestStrategyEquivalence:
    """Both strategies return the same availability."""

    @pytest.mark.parametrize("seed", range(20))
    async def test_random_states(self, async_session: AsyncSession, seed: int) -> None:
        await load_random_state(async_session, seed)
        client, store = strategies(async_session)

        for date in QUERY_DATES:
            assert await client.for_date(date) == await store.for_date(date), (
                f"seed={seed} date={date!r}"
            )

    async def test_example_scenario(self, async_session: AsyncSession, braces_booking) -> None:
        client, store = strategies(async_session)

        expected = [
            TreatmentAvailability(name="Braces", price=120, slots=["9AM", "11AM"]),
            TreatmentAvailability(name="Cleaning", price=60, slots=["9AM", "10AM"]),
        ]

        assert await client.for_date("2024-01-05") == expected
        assert await store.for_date("2024-01-05") == expected

    async def test_fully_booked_treatment(self, async_session: AsyncSession, braces_catalog) -> None:
        async_session.add_all(
            [
                Booking(treatment="Cleaning", appointment_date="2024-01-05", slot="9AM", email="a@x.com"),
                Booking(treatment="Cleaning", appointment_date="2024-01-05", slot="10AM", email="b@x.com"),
            ]
        )
        await async_session.commit()
        client, store = strategies(async_session)

        store_result = await store.for_date("2024-01-05")

        assert store_result == await client.for_date("2024-01-05")
        assert store_result[1] == TreatmentAvailability(name="Cleaning", price=60, slots=[])

    async def test_treatment_without_slots(self, async_session: AsyncSession) -> None:
        async_session.add(build_treatment("Consultation", 30, []))
        await async_session.commit()
        client, store = strategies(async_session)

        expected = [TreatmentAvailability(name="Consultation", price=30, slots=[])]

        assert await client.for_date("2024-01-05") == expected
        assert await store.for_date("2024-01-05") == expected

    async def test_repeated_labels(self, async_session: AsyncSession) -> None:
        """Duplicate labels survive together or disappear together."""
        async_session.add(build_treatment("Braces", 120, ["9AM", "10AM", "9AM"]))
        async_session.add(
            Booking(treatment="Braces", appointment_date="2024-01-06", slot="9AM", email="a@x.com")
        )
        await async_session.commit()
        client, store = strategies(async_session)

        for date, slots in [("2024-01-05", ["9AM", "10AM", "9AM"]), ("2024-01-06", ["10AM"])]:
            assert (await client.for_date(date))[0].slots == slots
            assert (await store.for_date(date))[0].slots == slots

    async def test_catalog_order_ties_broken_by_name(self, async_session: AsyncSession) -> None:
        async_session.add_all(
            [
                build_treatment("Whitening", 80, ["9AM"], display_order=1),
                build_treatment("Braces", 120, ["9AM"], display_order=1),
                build_treatment("Checkup", 20, ["9AM"], display_order=0),
            ]
        )
        await async_session.commit()
        client, store = strategies(async_session)

        expected_names = ["Checkup", "Braces", "Whitening"]

        assert [a.name for a in await client.for_date(None)] == expected_names
        assert [a.name for a in await store.for_date(None)] == expected_names

    async def test_store_result_is_idempotent(self, async_session: AsyncSession, braces_booking) -> None:
        store = StoreComputedAvailability(async_session)

        assert await store.for_date("2024-01-05") == await store.for_date("2024-01-05")

    async def test_both_strategies_log_remaining_counts(
        self, async_session: AsyncSession, braces_booking, caplog
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="portal.booking.availability")

        for strategy in strategies(async_session):
            caplog.clear()
            await strategy.for_date("2024-01-05")

            messages = [r.getMessage() for r in caplog.records]
            assert "2024-01-05 Braces remaining=2" in messages
            assert "2024-01-05 Cleaning remaining=2" in messages


class TestStoreFailures:
    """Database failures become DataUnavailable."""

    async def test_store_query_failure(self) -> None:
        mock_session = AsyncMock()
        mock_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(DataUnavailable):
            await StoreComputedAvailability(mock_session).for_date("2024-01-05")

    async def test_client_query_failure(self) -> None:
        mock_session = AsyncMock()
        mock_session.execute = AsyncMock(side_effect=ConnectionRefusedError())
        client, _ = strategies(mock_session)

        with pytest.raises(DataUnavailable):
            await client.for_date("2024-01-05")
