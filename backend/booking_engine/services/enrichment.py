"""Best-effort enrichment of bookings with their accommodation summary."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from booking_engine.schemas.booking import AccommodationSummary, Booking
from booking_engine.schemas.listing import Listing

logger = logging.getLogger(__name__)

AccommodationLookup = Callable[[str], Awaitable[AccommodationSummary | Listing | None]]
MainImageLookup = Callable[[str], Awaitable[str | None]]


def _outcome(result: object, booking: Booking, what: str) -> object | None:
    """Unwrap one gathered result, turning a failure into ``None``.

    Cancellation and other non-``Exception`` errors are re-raised.
    """
    if isinstance(result, BaseException):
        if not isinstance(result, Exception):
            raise result
        logger.warning(
            "Could not load %s for booking %s (accommodation %s): %s",
            what,
            booking.id,
            booking.accommodation_id,
            result,
        )
        return None
    return result


async def enrich(
    booking: Booking,
    accommodation_lookup: AccommodationLookup,
    main_image_lookup: MainImageLookup,
) -> Booking:
    """Attach or refresh the booking's accommodation summary.

    Both lookups run concurrently and each may fail on its own:

    - accommodation lookup failed: the booking keeps its existing summary
      (if any), refreshed with the new image when that lookup succeeded;
    - image lookup failed or empty: the previous image is kept.

    Lookup failures are logged and never raised. Only ``accommodation`` can
    change; identity, dates, guest count and status are left untouched.
    """
    summary_result, image_result = await asyncio.gather(
        accommodation_lookup(booking.accommodation_id),
        main_image_lookup(booking.accommodation_id),
        return_exceptions=True,
    )

    summary = _outcome(summary_result, booking, "accommodation")
    if isinstance(summary, Listing):
        summary = summary.summary()
    image = _outcome(image_result, booking, "main image") or None

    existing = booking.accommodation
    if isinstance(summary, AccommodationSummary):
        fallback_image = existing.main_image if existing is not None else None
        accommodation = summary.model_copy(
            update={"main_image": image or summary.main_image or fallback_image}
        )
    elif existing is not None:
        accommodation = existing.model_copy(update={"main_image": image or existing.main_image})
    else:
        return booking

    if accommodation == existing:
        return booking
    return booking.model_copy(update={"accommodation": accommodation})


def _shared(lookup: Callable[[str], Awaitable[Any]]) -> Callable[[str], Awaitable[Any]]:
    """Run ``lookup`` once per accommodation id; repeat callers await the same task."""
    tasks: dict[str, asyncio.Future] = {}

    def run(accommodation_id: str) -> Awaitable[Any]:
        if accommodation_id not in tasks:
            tasks[accommodation_id] = asyncio.ensure_future(lookup(accommodation_id))
        return tasks[accommodation_id]

    return run


async def enrich_all(
    bookings: Iterable[Booking],
    accommodation_lookup: AccommodationLookup,
    main_image_lookup: MainImageLookup,
) -> list[Booking]:
    """Enrich every booking concurrently; output order matches input order.

    Bookings of the same accommodation share one lookup of each kind.
    """
    accommodations = _shared(accommodation_lookup)
    images = _shared(main_image_lookup)
    return list(
        await asyncio.gather(*(enrich(booking, accommodations, images) for booking in bookings))
    )
