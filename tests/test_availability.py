"""Tests for in-process availability calculation.

Covers slot subtraction, catalog ordering, date scoping and
store failure propagation.
"""

import pytest

from portal.booking.availability import (
    ClientComputedAvailability,
    TreatmentAvailability,
    group_booked_slots,
    remaining_slots,
)
from portal.booking.errors import DataUnavailable
from tests.fakes import InMemoryBookingLedger, InMemorySlotCatalog, make_booking


def build_calculator(bookings=None) -> ClientComputedAvailability:
    catalog = InMemorySlotCatalog(
        {
            "Braces": (120, ["9AM", "10AM", "11AM"]),
            "Cleaning": (60, ["9AM", "10AM"]),
        }
    )
    return ClientComputedAvailability(catalog, InMemoryBookingLedger(bookings))


class TestRemainingSlots:
    """Tests for the ordered set difference."""

    def test_removes_booked_slots(self) -> None:
        assert remaining_slots(["9AM", "10AM", "11AM"], ["10AM"]) == ["9AM", "11AM"]

    def test_keeps_catalog_order(self) -> None:
        """Order of booked slots does not matter."""
        slots = ["8AM", "9AM", "10AM", "11AM"]
        assert remaining_slots(slots, ["11AM", "8AM"]) == ["9AM", "10AM"]

    def test_nothing_booked(self) -> None:
        assert remaining_slots(["9AM", "10AM"], []) == ["9AM", "10AM"]

    def test_everything_booked(self) -> None:
        assert remaining_slots(["9AM", "10AM"], {"9AM", "10AM"}) == []

    def test_unknown_booked_slot_ignored(self) -> None:
        assert remaining_slots(["9AM"], ["7PM"]) == ["9AM"]

    def test_group_booked_slots(self) -> None:
        bookings = [
            make_booking("Braces", "2024-01-05", "9AM", "a@x.com"),
            make_booking("Braces", "2024-01-05", "11AM", "b@x.com"),
            make_booking("Cleaning", "2024-01-05", "9AM", "a@x.com"),
        ]
        assert group_booked_slots(bookings) == {
            "Braces": {"9AM", "11AM"},
            "Cleaning": {"9AM"},
        }


class TestClientComputedAvailability:
    """Tests for availability computed from catalog and ledger reads."""

    async def test_example_scenario(self) -> None:
        """One Braces booking at 10AM leaves 9AM and 11AM."""
        calculator = build_calculator(
            [make_booking("Braces", "2024-01-05", "10AM", "a@x.com")]
        )

        availability = await calculator.for_date("2024-01-05")

        assert availability == [
            TreatmentAvailability(name="Braces", price=120, slots=["9AM", "11AM"]),
            TreatmentAvailability(name="Cleaning", price=60, slots=["9AM", "10AM"]),
        ]

    async def test_other_dates_do_not_consume_slots(self) -> None:
        calculator = build_calculator(
            [make_booking("Braces", "2024-01-06", "10AM")]
        )

        availability = await calculator.for_date("2024-01-05")

        assert availability[0].slots == ["9AM", "10AM", "11AM"]

    async def test_bookings_only_affect_their_treatment(self) -> None:
        calculator = build_calculator(
            [make_booking("Cleaning", "2024-01-05", "9AM")]
        )

        availability = await calculator.for_date("2024-01-05")

        assert availability[0].slots == ["9AM", "10AM", "11AM"]
        assert availability[1].slots == ["10AM"]

    async def test_fully_booked_treatment_still_listed(self) -> None:
        calculator = build_calculator(
            [
                make_booking("Cleaning", "2024-01-05", "9AM", "a@x.com"),
                make_booking("Cleaning", "2024-01-05", "10AM", "b@x.com"),
            ]
        )

        availability = await calculator.for_date("2024-01-05")

        assert [a.name for a in availability] == ["Braces", "Cleaning"]
        assert availability[1].slots == []

    async def test_double_booked_slot_removed_once(self) -> None:
        """Two patients on the same slot remove it once, nothing else."""
        calculator = build_calculator(
            [
                make_booking("Braces", "2024-01-05", "9AM", "a@x.com"),
                make_booking("Braces", "2024-01-05", "9AM", "b@x.com"),
            ]
        )

        availability = await calculator.for_date("2024-01-05")

        assert availability[0].slots == ["10AM", "11AM"]

    async def test_missing_date_returns_full_catalog(self) -> None:
        calculator = build_calculator(
            [make_booking("Braces", "2024-01-05", "10AM")]
        )

        availability = await calculator.for_date(None)

        assert availability[0].slots == ["9AM", "10AM", "11AM"]
        assert availability[1].slots == ["9AM", "10AM"]

    async def test_empty_date_is_a_literal_key(self) -> None:
        calculator = build_calculator(
            [
                make_booking("Braces", "2024-01-05", "10AM"),
                make_booking("Braces", "", "9AM"),
            ]
        )

        availability = await calculator.for_date("")

        assert availability[0].slots == ["10AM", "11AM"]

    async def test_empty_catalog(self) -> None:
        calculator = ClientComputedAvailability(
            InMemorySlotCatalog(), InMemoryBookingLedger()
        )

        assert await calculator.for_date("2024-01-05") == []

    async def test_repeated_queries_identical(self) -> None:
        calculator = build_calculator(
            [make_booking("Braces", "2024-01-05", "10AM")]
        )

        first = await calculator.for_date("2024-01-05")
        second = await calculator.for_date("2024-01-05")

        assert first == second

    async def test_does_not_mutate_catalog(self) -> None:
        catalog = InMemorySlotCatalog({"Braces": (120, ["9AM", "10AM"])})
        ledger = InMemoryBookingLedger([make_booking("Braces", "2024-01-05", "9AM")])
        calculator = ClientComputedAvailability(catalog, ledger)

        await calculator.for_date("2024-01-05")

        assert catalog.options[0].slots == ["9AM", "10AM"]


class TestAvailabilityFailures:
    """Store failures must surface, never as an empty result."""

    async def test_ledger_unavailable(self) -> None:
        calculator = build_calculator()
        calculator.ledger.unavailable = True

        with pytest.raises(DataUnavailable):
            await calculator.for_date("2024-01-05")

    async def test_catalog_unavailable(self) -> None:
        calculator = build_calculator()
        calculator.catalog.unavailable = True

        with pytest.raises(DataUnavailable):
            await calculator.for_date("2024-01-05")
