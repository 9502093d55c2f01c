"""Pydantic v2 schemas for bookings and their denormalized summaries."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------


class AccommodationSummary(BaseModel):
    """Subset of an accommodation used for display and aggregation."""

    title: str
    city: str = ""
    nightly_price: Decimal = Field(Decimal("0"), ge=0)
    main_image: str | None = None

    model_config = ConfigDict(frozen=True)


class GuestSummary(BaseModel):
    """Guest details denormalized onto host-facing bookings."""

    name: str
    email: str

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Booking
# ---------------------------------------------------------------------------


class Booking(BaseModel):
    """A read-only booking projection.

    Never mutated in place: status normalization and enrichment both return
    a copy built with ``model_copy(update=...)``.
    """

    id: str
    accommodation_id: str
    guest_id: str
    check_in: date
    check_out: date
    guests: int = Field(1, ge=1)
    status: str
    created_at: datetime | None = None
    accommodation: AccommodationSummary | None = None
    guest: GuestSummary | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_dates(self) -> "Booking":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingFilters(BaseModel):
    """Optional clauses applied to a booking listing. Absent clauses match everything."""

    status: str | None = None
    check_in_from: date | None = None
    check_out_to: date | None = None

    model_config = ConfigDict(frozen=True)
