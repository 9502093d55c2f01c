"""Remote booking records <-> ``Booking``."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from booking_engine.config import settings
from booking_engine.mappers._fields import first
from booking_engine.schemas.booking import Booking
from booking_engine.services.dates import DateLike, parse_date
from booking_engine.services.status import PENDING, to_domain

logger = logging.getLogger(__name__)


def _remote_id(value: str | int) -> str | int:
    text = str(value)
    return int(text) if text.isdigit() else text


def booking_from_api(record: Mapping[str, Any]) -> Booking:
    """Translate one remote booking record.

    Accepts the remote camelCase shape (``idAccommodation``, ``dateCheckin``,
    ``statusReservation``...) and records already in canonical snake_case.
    Date-times are reduced to their calendar day in the configured zone.
    The status always comes out in the domain vocabulary.

    Raises:
        pydantic.ValidationError: If required fields are missing or the
            dates are not in order.
    """
    if "accommodation_id" in record:
        data = dict(record)
        data["status"] = to_domain(str(data.get("status") or PENDING))
        return Booking.model_validate(data)

    guest = record.get("guest")
    if not (isinstance(guest, Mapping) and guest.get("name") and guest.get("email")):
        guest = None
    return Booking.model_validate(
        {
            "id": str(record.get("id", "")),
            "accommodation_id": str(first(record, "idAccommodation", default="")),
            "guest_id": str(first(record, "idGuest", default="")),
            "check_in": parse_date(record.get("dateCheckin")),
            "check_out": parse_date(record.get("dateCheckout")),
            "guests": first(record, "quantityPeople", default=1),
            "status": to_domain(str(first(record, "statusReservation", default=PENDING))),
            "created_at": record.get("dateCreation"),
            "guest": guest,
        }
    )


def bookings_from_api(records: Iterable[Any]) -> list[Booking]:
    """Translate a batch of remote records, skipping the ones that cannot form a booking.

    A corrupt record (bad dates, missing ids, not a mapping) is logged and
    dropped so the rest of the batch still comes through.
    """
    bookings: list[Booking] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.warning("Skipping booking record of type %s", type(record).__name__)
            continue
        try:
            bookings.append(booking_from_api(record))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid booking record %s: %s",
                record.get("id"),
                exc.errors(include_url=False),
            )
    return bookings


def booking_to_api(
    accommodation_id: str | int,
    check_in: DateLike,
    check_out: DateLike,
    guests: int,
    guest_id: str | int,
) -> dict[str, Any]:
    """Build the remote create/update payload.

    Dates are stamped with the fixed check-in and check-out hours.

    Raises:
        ValueError: If either date cannot be parsed.
    """
    start = parse_date(check_in)
    end = parse_date(check_out)
    if start is None or end is None:
        raise ValueError("check_in and check_out must be valid dates")

    return {
        "dateCheckin": f"{start.isoformat()}T{settings.check_in_hour:02d}:00:00",
        "dateCheckout": f"{end.isoformat()}T{settings.check_out_hour:02d}:00:00",
        "idAccommodation": _remote_id(accommodation_id),
        "idGuest": _remote_id(guest_id),
        "quantityPeople": guests,
    }
