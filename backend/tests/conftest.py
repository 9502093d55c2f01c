"""Shared test configuration and fixtures.

Remote collaborators are replaced with ``AsyncMock`` sources; bookings are
built through small factories so each test states only the fields it cares
about.
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from booking_engine.schemas.booking import Booking

# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def booking_factory():
    """Return a builder for canonical ``Booking`` instances."""

    def _make(
        booking_id: str = "b1",
        check_in: str = "2025-01-01",
        check_out: str = "2025-01-03",
        status: str = "CONFIRMADA",
        **overrides,
    ) -> Booking:
        data = {
            "id": booking_id,
            "accommodation_id": "10",
            "guest_id": "7",
            "check_in": check_in,
            "check_out": check_out,
            "guests": 2,
            "status": status,
        }
        data.update(overrides)
        return Booking.model_validate(data)

    return _make


@pytest.fixture
def remote_booking():
    """Return a builder for booking records in the remote camelCase shape."""

    def _make(
        booking_id: int = 1,
        accommodation_id: int = 10,
        check_in: str = "2025-01-01",
        check_out: str = "2025-01-03",
        status: str = "CONFIRMED",
    ) -> dict:
        return {
            "id": booking_id,
            "idAccommodation": accommodation_id,
            "idGuest": 7,
            "dateCheckin": f"{check_in}T14:00:00",
            "dateCheckout": f"{check_out}T12:00:00",
            "quantityPeople": 2,
            "statusReservation": status,
            "dateCreation": "2024-12-01T10:00:00",
        }

    return _make


@pytest.fixture
def january_bookings(booking_factory) -> list[Booking]:
    """Three bookings of one accommodation: two in January, one in February."""
    return [
        booking_factory("A", "2025-01-01", "2025-01-03", "CONFIRMADA"),
        booking_factory("B", "2025-01-10", "2025-01-12", "PENDIENTE"),
        booking_factory("C", "2025-02-01", "2025-02-02", "COMPLETADA"),
    ]


# ---------------------------------------------------------------------------
# Remote sources
# ---------------------------------------------------------------------------


@pytest.fixture
def booking_source() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def accommodation_source() -> AsyncMock:
    source = AsyncMock()
    source.fetch_accommodation.return_value = {
        "id": 10,
        "qualification": "Casa rural",
        "city": "Santander",
        "priceNight": 100,
    }
    source.fetch_main_image_url.return_value = "https://img.example/10.jpg"
    return source


@pytest.fixture
def rating_source() -> AsyncMock:
    source = AsyncMock()
    source.fetch_average_rating.return_value = 4.6
    return source


@pytest.fixture
def metrics_source() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def fixed_clock():
    """A clock pinned to 2025-02-10."""
    return lambda: date(2025, 2, 10)
