"""Booking metrics aggregation: totals, monthly buckets and windowed occupancy.

A stay is attributed wholly to its check-in month; nights that fall in the
following month are not split off. This is a known approximation of the
monthly breakdown, not an accounting-grade split.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from booking_engine.schemas.analytics import Metrics, MetricsWindow, MonthBucket
from booking_engine.schemas.booking import Booking
from booking_engine.services.dates import month_key, night_count

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def _in_window(booking: Booking, window: MetricsWindow | None) -> bool:
    if window is None:
        return True
    if window.start is not None and booking.check_in < window.start:
        return False
    if window.end is not None and booking.check_out > window.end:
        return False
    return True


def _nightly_price(booking: Booking, nightly_price: Decimal | None) -> Decimal:
    if nightly_price is not None:
        return Decimal(nightly_price)
    if booking.accommodation is not None:
        return booking.accommodation.nightly_price
    return Decimal("0")


def occupancy_rate(booked_nights: int, window: MetricsWindow | None) -> Decimal:
    """Booked nights as a percentage of the window's days (2 dp).

    Returns 0.00 when the window is missing a bound.
    """
    if window is None or not window.is_bounded or window.span_days <= 0:
        return Decimal("0.00")
    rate = Decimal(booked_nights * 100) / Decimal(window.span_days)
    return rate.quantize(_CENT, rounding=ROUND_HALF_UP)


def aggregate(
    bookings: Iterable[Booking],
    nightly_price: Decimal | int | float | None,
    window: MetricsWindow | None = None,
    external_rating: float = 0.0,
) -> Metrics:
    """Aggregate bookings into totals, per-month buckets and occupancy.

    Args:
        bookings: Bookings of one accommodation (or of a host's whole
            portfolio when ``nightly_price`` is None).
        nightly_price: Price applied to every night. ``None`` uses each
            booking's own accommodation summary price, 0 when it has none.
        window: Optional bounds. Each present bound filters bookings
            (check-in >= start, check-out <= end); occupancy needs both.
        external_rating: Average rating from the rating source, passed
            through unchanged.

    Returns:
        A ``Metrics`` instance; all zero with an empty ``by_month`` when no
        booking survives the window.
    """
    price = Decimal(str(nightly_price)) if isinstance(nightly_price, float) else nightly_price

    total_bookings = 0
    total_revenue = Decimal("0")
    booked_nights = 0
    counts: dict[str, int] = defaultdict(int)
    revenues: dict[str, Decimal] = defaultdict(Decimal)

    for booking in bookings:
        if not _in_window(booking, window):
            continue

        nights = night_count(booking.check_in, booking.check_out)
        revenue = nights * _nightly_price(booking, price)
        key = month_key(booking.check_in)
        if key != month_key(booking.check_out):
            logger.debug(
                "Booking %s spans %s..%s; attributed to %s",
                booking.id,
                booking.check_in,
                booking.check_out,
                key,
            )

        total_bookings += 1
        total_revenue += revenue
        booked_nights += nights
        counts[key] += 1
        revenues[key] += revenue

    return Metrics(
        total_bookings=total_bookings,
        total_revenue=total_revenue,
        average_rating=float(external_rating or 0.0),
        average_occupancy=occupancy_rate(booked_nights, window),
        by_month={key: MonthBucket(count=counts[key], revenue=revenues[key]) for key in counts},
    )
