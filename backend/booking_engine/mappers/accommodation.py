"""Remote accommodation records -> ``Listing`` / ``AccommodationSummary``.

The remote service is inconsistent about field names for the same concept
(``services`` vs ``typeServicesEnum``, ``images`` vs ``imagesAccommodation``,
``priceNight`` vs ``price_night``...). All of that is resolved here.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from booking_engine.mappers._fields import first, to_decimal, to_float, to_int
from booking_engine.schemas.booking import AccommodationSummary
from booking_engine.schemas.listing import LISTING_ACTIVE, LISTING_DELETED, Listing

SERVICE_CODE_TO_LABEL: dict[str, str] = {
    "WIFI": "WiFi",
    "AIR_CONDITIONING": "Aire acondicionado",
    "KITCHEN": "Cocina equipada",
    "TV": "TV",
    "WASHER": "Lavadora",
    "PARKING": "Parking gratuito",
    "GARDEN": "Jardín",
    "POOL": "Piscina",
    "GYM": "Gimnasio",
    "SPA": "Spa",
    "BBQ": "Barbacoa",
    "TERRACE": "Terraza",
}

SERVICE_LABEL_TO_CODE: dict[str, str] = {label: code for code, label in SERVICE_CODE_TO_LABEL.items()}

DEFAULT_SERVICE_CODE = "WIFI"


def _service_labels(raw: Any) -> list[str]:
    if raw is None:
        return []
    codes = raw if isinstance(raw, (list, tuple)) else [raw]
    return [SERVICE_CODE_TO_LABEL.get(str(code), str(code)) for code in codes]


def _images(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, (list, tuple)):
        return []
    images = [
        {
            "url": str(image["url"]),
            "principal": bool(first(image, "principal", "isPrincipal", default=False)),
        }
        for image in raw
        if isinstance(image, Mapping) and image.get("url")
    ]
    if images and not any(image["principal"] for image in images):
        images[0]["principal"] = True
    return images


def _rating(raw: Any) -> float | None:
    return None if raw is None else to_float(raw)


def _status(raw: Any) -> str:
    # A record without a status (summary endpoints) is treated as active.
    if raw is None or raw in ("ACTIVE", LISTING_ACTIVE):
        return LISTING_ACTIVE
    return LISTING_DELETED


def listing_from_api(record: Mapping[str, Any]) -> Listing:
    """Translate one remote accommodation record.

    Raises:
        pydantic.ValidationError: If the record cannot form a valid listing
            (e.g. a negative price).
    """
    return Listing.model_validate(
        {
            "id": str(record.get("id", "")),
            "title": str(first(record, "qualification", "title", "name", default="")),
            "description": str(first(record, "description", default="")),
            "city": str(first(record, "city", default="")),
            "address": str(first(record, "address", "address_accommodation", default="")),
            "lat": to_float(first(record, "latitude", "lat")),
            "lng": to_float(first(record, "longitude", "lng")),
            "nightly_price": to_decimal(first(record, "priceNight", "price_night")),
            "max_guests": max(1, to_int(first(record, "maximumCapacity", "maximux_capacity_accommodation"), 1)),
            "services": _service_labels(first(record, "services", "typeServicesEnum")),
            "images": _images(first(record, "images", "imagesAccommodation")),
            "status": _status(record.get("statusAccommodation")),
            "host_id": str(first(record, "idHost", default="")),
            "average_rating": _rating(first(record, "averageRating", "ratingPromedio")),
            "created_at": first(record, "dateCreation", "createdAt") or None,
            "updated_at": first(record, "dateUpdate", "updatedAt") or None,
        }
    )


def listing_to_api(listing: Listing, host_id: str | int) -> dict[str, Any]:
    """Build the remote create/update payload. Unknown service labels fall back to WIFI."""
    return {
        "qualification": listing.title,
        "description": listing.description,
        "city": listing.city,
        "address": listing.address,
        "latitude": listing.lat,
        "longitude": listing.lng,
        "priceNight": float(listing.nightly_price),
        "maximumCapacity": listing.max_guests,
        "services": [SERVICE_LABEL_TO_CODE.get(label, DEFAULT_SERVICE_CODE) for label in listing.services],
        "idHost": int(host_id) if str(host_id).isdigit() else host_id,
        "images": [
            {"url": image.url, "isPrincipal": image.principal, "displayOrder": index}
            for index, image in enumerate(listing.images, start=1)
        ],
    }


def summary_from_api(record: Mapping[str, Any]) -> AccommodationSummary:
    return listing_from_api(record).summary()


def collection_items(raw: Any) -> list[Any]:
    """Unwrap a host collection sent as ``{content: [...]}``, ``{items: [...]}`` or a bare list."""
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        items = first(raw, "content", "items", default=[])
        return list(items) if isinstance(items, Sequence) and not isinstance(items, str) else []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []
