"""Page normalization and in-memory filter + paginate passes.

Remote collections arrive either as a bare list or as an offset/size paged
envelope. ``normalize`` canonicalizes both into a ``Page``; ``apply`` windows
an already-fetched bulk collection after filtering it client-side.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from booking_engine.schemas.booking import Booking, BookingFilters
from booking_engine.schemas.listing import LISTING_ACTIVE, Listing, ListingFilters
from booking_engine.schemas.pagination import Page
from booking_engine.services.status import to_domain

logger = logging.getLogger(__name__)

T = TypeVar("T")
Predicate = Callable[[Any], bool]


class PagedEnvelope(BaseModel):
    """Offset/size paged envelope as sent by the remote service (0-based ``number``)."""

    content: list[Any] | None = None
    total_elements: int | None = Field(None, alias="totalElements")
    total_pages: int | None = Field(None, alias="totalPages")
    number: int | None = None
    size: int | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def page_count(total: int, page_size: int) -> int:
    """Total pages for ``total`` items; never less than 1."""
    return max(1, math.ceil(total / page_size))


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")


def _slice(items: Sequence[T], page: int, page_size: int) -> list[T]:
    start = max(0, (page - 1) * page_size)
    return list(items[start:start + page_size])


def _map(items: list[Any], item_mapper: Callable[[Any], T] | None) -> list[Any]:
    if item_mapper is None:
        return items
    return [item_mapper(item) for item in items]


# ---------------------------------------------------------------------------
# PageNormalizer
# ---------------------------------------------------------------------------


def _from_sequence(
    raw: Sequence[Any],
    page: int,
    page_size: int,
    item_mapper: Callable[[Any], T] | None,
) -> Page:
    total = len(raw)
    return Page(
        items=_map(_slice(raw, page, page_size), item_mapper),
        page=max(1, page),
        page_size=page_size,
        total=total,
        total_pages=page_count(total, page_size),
    )


def _from_envelope(
    envelope: PagedEnvelope,
    fallback_size: int,
    item_mapper: Callable[[Any], T] | None,
) -> Page:
    content = list(envelope.content or [])
    page_size = envelope.size if envelope.size and envelope.size > 0 else fallback_size
    total = envelope.total_elements if envelope.total_elements is not None else len(content)
    total_pages = envelope.total_pages if envelope.total_pages is not None else 1
    return Page(
        items=_map(content, item_mapper),
        page=max(0, envelope.number or 0) + 1,
        page_size=page_size,
        total=max(0, total),
        total_pages=max(1, total_pages),
    )


def normalize(
    raw: Sequence[Any] | Mapping[str, Any] | None,
    fallback_page: int,
    fallback_size: int,
    *,
    item_mapper: Callable[[Any], T] | None = None,
) -> Page:
    """Canonicalize a bare list or a paged envelope into a ``Page``.

    For a bare list the page window is cut client-side from
    ``fallback_page``/``fallback_size``. For an envelope every missing field
    falls back (size -> ``fallback_size``, total -> ``len(content)``,
    total pages -> 1, page -> 1). ``item_mapper`` is applied to the returned
    items only.

    Raises:
        ValueError: If ``fallback_size`` is not positive.
        TypeError: If ``raw`` is neither a sequence nor a mapping.
    """
    _check_page_size(fallback_size)

    if raw is None:
        return _from_sequence([], fallback_page, fallback_size, item_mapper)
    if isinstance(raw, Mapping):
        return _from_envelope(PagedEnvelope.model_validate(raw), fallback_size, item_mapper)
    if isinstance(raw, (list, tuple)):
        return _from_sequence(raw, fallback_page, fallback_size, item_mapper)
    raise TypeError(f"Unsupported page payload: {type(raw).__name__}")


# ---------------------------------------------------------------------------
# InMemoryFilterPaginator
# ---------------------------------------------------------------------------


def booking_predicate(filters: BookingFilters | None) -> Predicate:
    """Compose the optional status / check-in / check-out clauses.

    The status clause accepts either vocabulary; both sides are compared in
    the domain vocabulary.
    """
    if filters is None:
        return lambda booking: True

    status = to_domain(filters.status) if filters.status else None
    check_in_from = filters.check_in_from
    check_out_to = filters.check_out_to

    def matches(booking: Booking) -> bool:
        if status is not None and to_domain(booking.status) != status:
            return False
        if check_in_from is not None and booking.check_in < check_in_from:
            return False
        if check_out_to is not None and booking.check_out > check_out_to:
            return False
        return True

    return matches


def listing_predicate(filters: ListingFilters | None) -> Predicate:
    """Active listings matching city, price range and any of the services."""
    city = filters.city.strip().lower() if filters and filters.city else None
    min_price = filters.min_price if filters else None
    max_price = filters.max_price if filters else None
    services = set(filters.services) if filters else set()

    def matches(listing: Listing) -> bool:
        if listing.status != LISTING_ACTIVE:
            return False
        if city and city not in listing.city.lower():
            return False
        if min_price is not None and listing.nightly_price < min_price:
            return False
        if max_price is not None and listing.nightly_price > max_price:
            return False
        if services and not services.intersection(listing.services):
            return False
        return True

    return matches


def apply(
    all_items: Sequence[T],
    predicate: Predicate | None,
    page: int,
    page_size: int,
) -> Page:
    """Filter a bulk collection and cut one page out of the result.

    ``page`` is clamped into ``[1, total_pages]`` so that a page index left
    over from a wider filter lands on the last valid page instead of an
    empty or out-of-range slice. ``all_items`` is never modified.
    """
    _check_page_size(page_size)

    filtered = [item for item in all_items if predicate is None or predicate(item)]
    total = len(filtered)
    total_pages = page_count(total, page_size)
    current = min(max(1, page), total_pages)
    if current != page:
        logger.debug("Clamped page %s to %s (total=%s)", page, current, total)

    return Page(
        items=_slice(filtered, current, page_size),
        page=current,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )
