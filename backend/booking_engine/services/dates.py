"""Date-interval arithmetic for stays: nights, occupied days, month keys.

Every function is total over its inputs. Unparseable values degrade to a
neutral result (0 nights, no days, empty string) instead of raising, so
callers that need strict validation must validate before calling.
"""

import calendar
import math
from collections.abc import Iterator
from datetime import date, datetime, time, timedelta

from booking_engine.config import settings

DateLike = date | datetime | str

_NOON = time(12, 0)
_ONE_DAY = timedelta(days=1)

# es-ES short month names, as rendered in booking cards ("02 sept").
_SHORT_MONTHS = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
)


def _local_day(moment: datetime) -> date:
    """Calendar day of a date-time in the configured local zone."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(settings.zone)
    return moment.date()


def parse_date(value: DateLike | None) -> date | None:
    """Return the calendar day for a date, date-time, or ISO string.

    Accepts ``YYYY-MM-DD`` as well as full ISO date-times (``Z`` or offset
    suffixes included). Returns ``None`` for anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _local_day(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _local_day(parsed)


def night_count(check_in: DateLike | None, check_out: DateLike | None) -> int:
    """Number of nights between two days, rounded up.

    Both days are pinned to local noon and compared on the wall clock, so a
    stay spanning a daylight-saving change still counts whole nights.
    """
    start = parse_date(check_in)
    end = parse_date(check_out)
    if start is None or end is None:
        return 0

    elapsed = datetime.combine(end, _NOON) - datetime.combine(start, _NOON)
    return math.ceil(elapsed / _ONE_DAY)


def iter_days(check_in: DateLike | None, check_out: DateLike | None) -> Iterator[date]:
    """Yield every calendar day from check-in through check-out, both included."""
    start = parse_date(check_in)
    end = parse_date(check_out)
    if start is None or end is None:
        return

    day = start
    while day <= end:
        yield day
        day += _ONE_DAY


def enumerate_days(check_in: DateLike | None, check_out: DateLike | None) -> list[str]:
    """ISO days occupied by one stay: ``night_count + 1`` entries, endpoints included."""
    return [day.isoformat() for day in iter_days(check_in, check_out)]


def month_key(value: DateLike | None) -> str:
    """``YYYY-MM`` of the value's calendar month, ``""`` when unparseable."""
    day = parse_date(value)
    if day is None:
        return ""
    return f"{day.year:04d}-{day.month:02d}"


def format_date(value: DateLike | None) -> str:
    """``DD/MM/YYYY``, or ``""`` when unparseable."""
    day = parse_date(value)
    if day is None:
        return ""
    return day.strftime("%d/%m/%Y")


def format_date_short(value: DateLike | None) -> str:
    """Short day-month label such as ``"02 sept"``, or ``""`` when unparseable."""
    day = parse_date(value)
    if day is None:
        return ""
    return f"{day.day:02d} {_SHORT_MONTHS[day.month - 1]}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> date:
    """Shift a day by whole months, clamping to the target month's last day."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, days_in_month(year, month)))
