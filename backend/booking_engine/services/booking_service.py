"""Booking listings: drives the remote sources through the pure transforms.

Guest listings are paged remotely. Host listings and enriched listings are
fetched in bulk and filtered/paged in memory. Fetch failures are not
retried: the listing comes back empty with ``error`` set.
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from booking_engine.config import Settings, settings as default_settings
from booking_engine.mappers.accommodation import collection_items, summary_from_api
from booking_engine.mappers.booking import bookings_from_api
from booking_engine.schemas.booking import AccommodationSummary, Booking, BookingFilters
from booking_engine.schemas.calendar import CalendarDay
from booking_engine.schemas.pagination import Page
from booking_engine.services.calendar import month_grid
from booking_engine.services.calendar import occupied_dates as occupied_dates_of
from booking_engine.services.enrichment import enrich_all
from booking_engine.services.pagination import apply, booking_predicate, normalize
from booking_engine.services.status import to_domain, to_remote
from booking_engine.sources import AccommodationSource, BookingSource, Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingListResult:
    """A page of bookings plus the error message when the fetch failed."""

    page: Page
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def query_params(filters: BookingFilters | None) -> dict[str, str]:
    """Remote query parameters for a booking listing.

    The status is sent in the remote vocabulary; a status with no remote
    equivalent is left out rather than sent untranslated.
    """
    params: dict[str, str] = {}
    if filters is None:
        return params
    if filters.status:
        remote_status = to_remote(to_domain(filters.status))
        if remote_status is not None:
            params["status"] = remote_status
    if filters.check_in_from is not None:
        params["fechaInicio"] = filters.check_in_from.isoformat()
    if filters.check_out_to is not None:
        params["fechaFin"] = filters.check_out_to.isoformat()
    return params


def _bookings_from(raw: Any) -> list[Booking]:
    return bookings_from_api(collection_items(raw))


def _booking_page(raw: Any, page: int, page_size: int) -> Page:
    """Normalize a booking listing; records that cannot form a booking are dropped.

    A bare list is mapped before it is windowed so the totals only count
    valid bookings. An envelope keeps the totals the source reports.
    """
    if isinstance(raw, (list, tuple)):
        return normalize(bookings_from_api(raw), page, page_size)
    result = normalize(raw, page, page_size)
    return result.model_copy(update={"items": bookings_from_api(result.items)})


class BookingService:
    """Booking listings, availability and enrichment for one signed-in user."""

    def __init__(
        self,
        bookings: BookingSource,
        accommodations: AccommodationSource,
        *,
        clock: Clock = date.today,
        config: Settings | None = None,
    ) -> None:
        self._bookings = bookings
        self._accommodations = accommodations
        self._clock = clock
        self._settings = config or default_settings

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _page_size(self, page_size: int | None) -> int:
        return page_size or self._settings.default_page_size

    def _failed(self, what: str, page_size: int) -> BookingListResult:
        logger.exception("Failed to load %s", what)
        return BookingListResult(page=apply([], None, 1, page_size), error=f"Could not load {what}")

    async def _accommodation_summary(self, accommodation_id: str) -> AccommodationSummary:
        return summary_from_api(await self._accommodations.fetch_accommodation(accommodation_id))

    async def _main_image(self, accommodation_id: str) -> str | None:
        return await self._accommodations.fetch_main_image_url(accommodation_id)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def list_bookings(
        self,
        filters: BookingFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> BookingListResult:
        """Bookings of the current user, normalized from whatever shape the source returns."""
        size = self._page_size(page_size)
        try:
            raw = await self._bookings.fetch_bookings(query_params(filters))
            return BookingListResult(page=_booking_page(raw, page, size))
        except Exception:
            return self._failed("bookings", size)

    async def list_guest_bookings(
        self,
        guest_id: str,
        filters: BookingFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> BookingListResult:
        """One guest's bookings, paged remotely (the source counts pages from 0)."""
        size = self._page_size(page_size)
        params = query_params(filters)
        params.update({"page": str(max(0, page - 1)), "size": str(size)})
        try:
            raw = await self._bookings.fetch_guest_bookings(guest_id, params)
            return BookingListResult(page=_booking_page(raw, page, size))
        except Exception:
            return self._failed(f"bookings of guest {guest_id}", size)

    async def host_bookings(self) -> list[Booking]:
        """Every booking across the host's accommodations, fetched concurrently."""
        accommodation_ids = [
            str(item["id"])
            for item in collection_items(await self._bookings.fetch_host_accommodations())
            if isinstance(item, Mapping) and item.get("id") is not None
        ]
        if not accommodation_ids:
            return []

        chunks = await asyncio.gather(
            *(self._bookings.fetch_accommodation_bookings(acc_id) for acc_id in accommodation_ids)
        )
        return [booking for chunk in chunks for booking in _bookings_from(chunk)]

    async def list_host_bookings(
        self,
        filters: BookingFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> BookingListResult:
        """Host view: bulk fetch, then filter and page in memory."""
        size = self._page_size(page_size)
        try:
            bookings = await self.host_bookings()
        except Exception:
            return self._failed("host bookings", size)
        return BookingListResult(page=apply(bookings, booking_predicate(filters), page, size))

    async def list_enriched_bookings(
        self,
        filters: BookingFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> BookingListResult:
        """Guest view with accommodation summaries attached.

        Fetches one bulk page, filters and pages it in memory, then enriches
        only the bookings on the returned page. Enrichment failures only drop
        the affected summaries.
        """
        size = self._page_size(page_size)
        bulk_size = self._settings.bulk_page_size
        try:
            raw = await self._bookings.fetch_bookings(query_params(filters))
            bulk = _booking_page(raw, 1, bulk_size)
        except Exception:
            return self._failed("bookings", size)

        result = apply(bulk.items, booking_predicate(filters), page, size)
        enriched = await enrich_all(result.items, self._accommodation_summary, self._main_image)
        return BookingListResult(page=result.model_copy(update={"items": enriched}))

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    async def occupied_dates(self, accommodation_id: str) -> frozenset[str]:
        """Occupied ISO days of one accommodation. Fetch errors propagate."""
        raw = await self._bookings.fetch_accommodation_bookings(accommodation_id)
        return occupied_dates_of(_bookings_from(raw))

    async def availability_grid(
        self,
        accommodation_id: str,
        reference_month: date | None = None,
    ) -> list[CalendarDay]:
        """Month grid for one accommodation; defaults to the current month."""
        occupied = await self.occupied_dates(accommodation_id)
        return month_grid(reference_month or self._clock(), occupied, clock=self._clock)
