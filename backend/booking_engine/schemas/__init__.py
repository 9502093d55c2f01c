"""Canonical models produced by the engine."""

from booking_engine.schemas.analytics import Metrics, MetricsWindow, MonthBucket
from booking_engine.schemas.booking import (
    AccommodationSummary,
    Booking,
    BookingFilters,
    GuestSummary,
)
from booking_engine.schemas.calendar import CalendarDay
from booking_engine.schemas.listing import Listing, ListingFilters, ListingImage
from booking_engine.schemas.pagination import Page

__all__ = [
    "AccommodationSummary",
    "Booking",
    "BookingFilters",
    "CalendarDay",
    "GuestSummary",
    "Listing",
    "ListingFilters",
    "ListingImage",
    "Metrics",
    "MetricsWindow",
    "MonthBucket",
    "Page",
]
