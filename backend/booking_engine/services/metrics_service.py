"""Per-accommodation aggregation and host metrics."""

import asyncio
import logging
from datetime import date

from booking_engine.config import Settings, settings as default_settings
from booking_engine.mappers.accommodation import collection_items, summary_from_api
from booking_engine.mappers.booking import bookings_from_api
from booking_engine.mappers.metrics import metrics_from_api
from booking_engine.schemas.analytics import Metrics, MetricsWindow
from booking_engine.services.dates import add_months
from booking_engine.services.metrics import aggregate
from booking_engine.sources import (
    AccommodationSource,
    BookingSource,
    Clock,
    MetricsSource,
    RatingSource,
)

logger = logging.getLogger(__name__)


def default_window(clock: Clock = date.today, months: int | None = None) -> MetricsWindow:
    """The last ``months`` months (settings default: 3) through today."""
    today = clock()
    span = default_settings.metrics_default_months if months is None else months
    return MetricsWindow(start=add_months(today, -span), end=today)


def window_params(window: MetricsWindow) -> dict[str, str]:
    params: dict[str, str] = {}
    if window.start is not None:
        params["from"] = window.start.isoformat()
    if window.end is not None:
        params["to"] = window.end.isoformat()
    return params


class MetricsService:
    """Booking metrics for a host's accommodations."""

    def __init__(
        self,
        bookings: BookingSource,
        accommodations: AccommodationSource,
        ratings: RatingSource,
        metrics: MetricsSource,
        *,
        clock: Clock = date.today,
        config: Settings | None = None,
    ) -> None:
        self._bookings = bookings
        self._accommodations = accommodations
        self._ratings = ratings
        self._metrics = metrics
        self._clock = clock
        self._settings = config or default_settings

    def _window(self, window: MetricsWindow | None) -> MetricsWindow:
        if window is not None:
            return window
        return default_window(self._clock, self._settings.metrics_default_months)

    async def _rating(self, accommodation_id: str) -> float:
        """Average rating, or 0 when the rating source fails."""
        try:
            return float(await self._ratings.fetch_average_rating(accommodation_id) or 0.0)
        except Exception as exc:
            logger.warning("Rating unavailable for accommodation %s: %s", accommodation_id, exc)
            return 0.0

    async def accommodation_metrics(
        self,
        accommodation_id: str,
        window: MetricsWindow | None = None,
    ) -> Metrics:
        """Aggregate one accommodation's bookings at its nightly price.

        ``window=None`` means the default window ending today; pass an empty
        ``MetricsWindow()`` to aggregate everything without occupancy.
        Booking and accommodation fetch errors propagate; a failed rating
        fetch counts as 0.
        """
        effective = self._window(window)
        bookings_raw, accommodation_raw, rating = await asyncio.gather(
            self._bookings.fetch_accommodation_bookings(accommodation_id),
            self._accommodations.fetch_accommodation(accommodation_id),
            self._rating(accommodation_id),
        )
        bookings = bookings_from_api(collection_items(bookings_raw))
        price = summary_from_api(accommodation_raw).nightly_price

        metrics = aggregate(bookings, price, effective, rating)
        logger.info(
            "Metrics for accommodation %s: bookings=%s revenue=%s occupancy=%s",
            accommodation_id,
            metrics.total_bookings,
            metrics.total_revenue,
            metrics.average_occupancy,
        )
        return metrics

    async def host_metrics(self, window: MetricsWindow | None = None) -> Metrics:
        """Host-wide metrics as reported by the metrics source, normalized."""
        raw = await self._metrics.fetch_host_metrics(window_params(self._window(window)))
        return metrics_from_api(raw)
