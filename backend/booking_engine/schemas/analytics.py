"""Pydantic v2 schemas for booking metrics."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MetricsWindow(BaseModel):
    """Optional date bounds for a metrics query.

    Occupancy is only computable when both bounds are present.
    """

    start: date | None = None
    end: date | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_bounds(self) -> "MetricsWindow":
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ValueError("window end must not be before window start")
        return self

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def span_days(self) -> int:
        """Inclusive day count of the window, 0 when unbounded."""
        if self.start is None or self.end is None:
            return 0
        return (self.end - self.start).days + 1


class MonthBucket(BaseModel):
    """Bookings and revenue attributed to one check-in month."""

    count: int = Field(0, ge=0)
    revenue: Decimal = Decimal("0")

    model_config = ConfigDict(frozen=True)


class Metrics(BaseModel):
    """Aggregated booking metrics for a host or a single accommodation."""

    total_bookings: int = 0
    total_revenue: Decimal = Decimal("0")
    average_rating: float = 0.0
    average_occupancy: Decimal = Decimal("0.00")  # percent of window days
    by_month: dict[str, MonthBucket] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def monthly_breakdown(self) -> list[tuple[str, MonthBucket]]:
        """Month buckets in chronological order (keys sort as YYYY-MM)."""
        return sorted(self.by_month.items())
