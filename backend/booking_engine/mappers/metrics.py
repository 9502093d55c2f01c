"""Remote host-metrics payloads -> ``Metrics``.

The metrics endpoint has answered in several shapes over time:

1. canonical Spanish keys (``totalReservas``, ``reservasPorMes``...);
2. English keys (``totalBookings``, ``bookingsByMonth``...);
3. ``{"data": [...records], "averageRating"?, "occupancy"?}``;
4. a bare list of records with no metadata.

Record lists are bucketed here by month label (or check-in month). Anything
unrecognized yields all-zero metrics.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from booking_engine.mappers._fields import first, to_decimal, to_float, to_int
from booking_engine.schemas.analytics import Metrics, MonthBucket

logger = logging.getLogger(__name__)

UNKNOWN_MONTH = "N/A"


def _occupancy(value: Any) -> Decimal:
    return to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _month_rows(
    rows: Any,
    label_keys: tuple[str, ...],
    count_keys: tuple[str, ...],
    revenue_key: str,
) -> dict[str, MonthBucket]:
    counts: dict[str, int] = defaultdict(int)
    revenues: dict[str, Decimal] = defaultdict(Decimal)
    for row in rows or []:
        if not isinstance(row, Mapping):
            continue
        label = str(first(row, *label_keys, default=""))
        counts[label] += to_int(first(row, *count_keys))
        revenues[label] += to_decimal(row.get(revenue_key))
    return {label: MonthBucket(count=counts[label], revenue=revenues[label]) for label in counts}


def _record_month(record: Mapping[str, Any]) -> str:
    label = first(record, "monthLabel", "month")
    if label:
        return str(label)
    check_in = record.get("checkIn")
    if isinstance(check_in, str) and len(check_in) >= 7:
        return check_in[:7]
    return UNKNOWN_MONTH


def _from_records(records: Iterable[Any], rating: Any = 0, occupancy: Any = 0) -> Metrics:
    counts: dict[str, int] = defaultdict(int)
    revenues: dict[str, Decimal] = defaultdict(Decimal)
    total = 0
    revenue = Decimal("0")

    for record in records:
        if not isinstance(record, Mapping):
            continue
        amount = to_decimal(first(record, "total", "amount"))
        month = _record_month(record)
        counts[month] += 1
        revenues[month] += amount
        total += 1
        revenue += amount

    return Metrics(
        total_bookings=total,
        total_revenue=revenue,
        average_rating=to_float(rating),
        average_occupancy=_occupancy(occupancy),
        by_month={month: MonthBucket(count=counts[month], revenue=revenues[month]) for month in counts},
    )


def metrics_from_api(raw: Any) -> Metrics:
    """Normalize any known metrics payload shape into ``Metrics``."""
    if isinstance(raw, Mapping):
        if "total_bookings" in raw:
            return Metrics.model_validate(raw)

        if raw.get("totalReservas") is not None:
            return Metrics(
                total_bookings=to_int(raw.get("totalReservas")),
                total_revenue=to_decimal(raw.get("ingresosTotales")),
                average_rating=to_float(raw.get("ratingPromedio")),
                average_occupancy=_occupancy(raw.get("ocupacionPromedio")),
                by_month=_month_rows(raw.get("reservasPorMes"), ("mes",), ("reservas",), "ingresos"),
            )

        if raw.get("totalBookings") is not None:
            return Metrics(
                total_bookings=to_int(raw.get("totalBookings")),
                total_revenue=to_decimal(raw.get("totalRevenue")),
                average_rating=to_float(raw.get("averageRating")),
                average_occupancy=_occupancy(raw.get("occupancy")),
                by_month=_month_rows(
                    raw.get("bookingsByMonth"), ("monthLabel", "month"), ("count", "bookings"), "revenue"
                ),
            )

        if isinstance(raw.get("data"), list):
            return _from_records(raw["data"], raw.get("averageRating"), raw.get("occupancy"))

    if isinstance(raw, list):
        return _from_records(raw)

    logger.warning("Unrecognized metrics payload of type %s; returning zero metrics", type(raw).__name__)
    return Metrics()
