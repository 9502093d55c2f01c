"""Contracts of the remote collaborators the services drive.

Transport, authentication and retries live behind these protocols; the
engine only sees raw payloads (bare lists, paged envelopes, plain records).
"""

from collections.abc import Callable, Mapping
from datetime import date
from typing import Any, Protocol

Clock = Callable[[], date]


class BookingSource(Protocol):
    async def fetch_bookings(self, params: Mapping[str, str]) -> Any:
        """Bookings of the current user: bare list or paged envelope."""
        ...

    async def fetch_guest_bookings(self, guest_id: str, params: Mapping[str, str]) -> Any:
        """One guest's bookings as a paged envelope (``page`` is 0-based)."""
        ...

    async def fetch_accommodation_bookings(self, accommodation_id: str) -> Any:
        """Every booking of one accommodation."""
        ...

    async def fetch_host_accommodations(self) -> Any:
        """The current host's accommodations: ``{content}``, ``{items}`` or a bare list."""
        ...


class AccommodationSource(Protocol):
    async def fetch_accommodation(self, accommodation_id: str) -> Mapping[str, Any]: ...

    async def fetch_main_image_url(self, accommodation_id: str) -> str | None: ...


class RatingSource(Protocol):
    async def fetch_average_rating(self, accommodation_id: str) -> float: ...


class MetricsSource(Protocol):
    async def fetch_host_metrics(self, params: Mapping[str, str]) -> Any:
        """Host metrics payload in any of the shapes ``metrics_from_api`` accepts."""
        ...
