"""Translation of raw remote records into canonical models."""

from booking_engine.mappers.accommodation import (
    collection_items,
    listing_from_api,
    listing_to_api,
    summary_from_api,
)
from booking_engine.mappers.booking import booking_from_api, booking_to_api, bookings_from_api
from booking_engine.mappers.metrics import metrics_from_api

__all__ = [
    "booking_from_api",
    "booking_to_api",
    "bookings_from_api",
    "collection_items",
    "listing_from_api",
    "listing_to_api",
    "metrics_from_api",
    "summary_from_api",
]
