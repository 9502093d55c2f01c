"""Availability calendar: occupied-day sets and month grids for one accommodation.

The booking form (disabled dates) and the host calendar both read the same
occupied set, so a day blocked in one view is blocked in the other.
"""

from collections.abc import Collection, Iterable
from datetime import date

from booking_engine.schemas.booking import Booking
from booking_engine.schemas.calendar import CalendarDay
from booking_engine.services.dates import DateLike, days_in_month, enumerate_days
from booking_engine.services.status import CANCELADA, to_domain
from booking_engine.sources import Clock


def occupied_dates(bookings: Iterable[Booking]) -> frozenset[str]:
    """ISO days covered by any non-cancelled booking, check-out day included."""
    days: set[str] = set()
    for booking in bookings:
        if to_domain(booking.status) == CANCELADA:
            continue
        days.update(enumerate_days(booking.check_in, booking.check_out))
    return frozenset(days)


def month_grid(
    reference_month: date,
    occupied: Collection[str],
    *,
    clock: Clock = date.today,
) -> list[CalendarDay]:
    """One ``CalendarDay`` per day of ``reference_month``'s calendar month.

    ``clock`` supplies "today" for the ``is_past`` flag.
    """
    today = clock()
    year, month = reference_month.year, reference_month.month

    grid: list[CalendarDay] = []
    for day_number in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_number)
        iso = day.isoformat()
        grid.append(
            CalendarDay(
                day=day_number,
                date=iso,
                is_occupied=iso in occupied,
                is_past=day < today,
            )
        )
    return grid


def is_range_available(
    check_in: DateLike,
    check_out: DateLike,
    occupied: Collection[str],
) -> bool:
    """True when none of the requested stay's days is already occupied."""
    return not any(day in occupied for day in enumerate_days(check_in, check_out))
