"""Booking status vocabulary: remote labels <-> domain labels.

The mapping is lossy in one direction. ``PAID`` folds into ``CONFIRMADA``
and has no inverse, so ``CONFIRMADA`` always goes back out as ``CONFIRMED``.
"""

from datetime import datetime, time, timedelta

from booking_engine.config import settings
from booking_engine.schemas.booking import Booking

# Remote vocabulary
PENDING = "PENDING"
CONFIRMED = "CONFIRMED"
PAID = "PAID"
CANCELED = "CANCELED"
COMPLETED = "COMPLETED"

# Domain vocabulary
PENDIENTE = "PENDIENTE"
CONFIRMADA = "CONFIRMADA"
CANCELADA = "CANCELADA"
COMPLETADA = "COMPLETADA"

REMOTE_TO_DOMAIN: dict[str, str] = {
    PENDING: PENDIENTE,
    CONFIRMED: CONFIRMADA,
    PAID: CONFIRMADA,
    CANCELED: CANCELADA,
    COMPLETED: COMPLETADA,
}

DOMAIN_TO_REMOTE: dict[str, str] = {
    PENDIENTE: PENDING,
    CONFIRMADA: CONFIRMED,
    CANCELADA: CANCELED,
    COMPLETADA: COMPLETED,
}

DOMAIN_STATUSES: frozenset[str] = frozenset(DOMAIN_TO_REMOTE)
CANCELLABLE_STATUSES: frozenset[str] = frozenset({PENDIENTE, CONFIRMADA})


def to_domain(remote_status: str) -> str:
    """Map a remote status to the domain vocabulary.

    Unknown values (including values already in the domain vocabulary) are
    returned unchanged.
    """
    return REMOTE_TO_DOMAIN.get(remote_status, remote_status)


def to_remote(domain_status: str) -> str | None:
    """Map a domain status to the remote vocabulary.

    Returns ``None`` when there is no remote equivalent; callers should then
    omit the status filter from the request.
    """
    return DOMAIN_TO_REMOTE.get(domain_status)


def normalize_status(booking: Booking) -> Booking:
    """Return a copy of the booking with its status in the domain vocabulary."""
    status = to_domain(booking.status)
    if status == booking.status:
        return booking
    return booking.model_copy(update={"status": status})


def can_cancel(
    booking: Booking,
    *,
    now: datetime,
    cutoff_hours: int | None = None,
) -> bool:
    """Whether a guest may still cancel the booking.

    Only pending or confirmed bookings qualify, and only while check-in
    (at the configured check-in hour) is at least ``cutoff_hours`` away.
    A naive ``now`` is read as local wall-clock time.
    """
    if to_domain(booking.status) not in CANCELLABLE_STATUSES:
        return False

    hours = settings.cancellation_cutoff_hours if cutoff_hours is None else cutoff_hours
    check_in_at = datetime.combine(booking.check_in, time(settings.check_in_hour))
    if now.tzinfo is not None:
        check_in_at = check_in_at.replace(tzinfo=settings.zone)
    return check_in_at - now >= timedelta(hours=hours)
