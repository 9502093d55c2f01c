"""Unit tests for booking metrics aggregation."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from booking_engine.schemas.analytics import Metrics, MetricsWindow, MonthBucket
from booking_engine.schemas.booking import AccommodationSummary
from booking_engine.services.metrics import aggregate, occupancy_rate

JANUARY = MetricsWindow(start=date(2025, 1, 1), end=date(2025, 1, 31))


class TestAggregate:
    """Totals, month buckets and occupancy."""

    def test_january_window(self, january_bookings):
        metrics = aggregate(january_bookings, Decimal("100"), JANUARY, external_rating=4.6)

        assert metrics.total_bookings == 2
        assert metrics.total_revenue == Decimal("400")
        assert metrics.by_month == {"2025-01": MonthBucket(count=2, revenue=Decimal("400"))}
        assert metrics.average_occupancy == Decimal("12.90")
        assert metrics.average_rating == 4.6

    def test_no_window_counts_everything_without_occupancy(self, january_bookings):
        metrics = aggregate(january_bookings, 100)

        assert metrics.total_bookings == 3
        assert metrics.total_revenue == Decimal("500")
        assert metrics.by_month["2025-02"] == MonthBucket(count=1, revenue=Decimal("100"))
        assert metrics.average_occupancy == Decimal("0.00")

    def test_single_bound_filters_but_has_no_occupancy(self, january_bookings):
        metrics = aggregate(january_bookings, 100, MetricsWindow(start=date(2025, 1, 5)))

        assert metrics.total_bookings == 2
        assert metrics.average_occupancy == Decimal("0.00")

    def test_empty_input(self):
        metrics = aggregate([], Decimal("100"), JANUARY)

        assert metrics.total_bookings == 0
        assert metrics.total_revenue == Decimal("0")
        assert metrics.by_month == {}
        assert metrics.average_occupancy == Decimal("0.00")

    def test_cross_month_stay_goes_to_check_in_month(self, booking_factory):
        booking = booking_factory(check_in="2025-01-30", check_out="2025-02-02")

        metrics = aggregate([booking], Decimal("50"))

        assert metrics.by_month == {"2025-01": MonthBucket(count=1, revenue=Decimal("150"))}

    def test_float_price_is_exact(self, booking_factory):
        booking = booking_factory(check_in="2025-01-01", check_out="2025-01-04")
        assert aggregate([booking], 0.1).total_revenue == Decimal("0.3")

    def test_missing_price_uses_booking_summary(self, booking_factory):
        summary = AccommodationSummary(title="Loft", nightly_price=Decimal("75"))
        bookings = [
            booking_factory("a", accommodation=summary),
            booking_factory("b"),
        ]

        metrics = aggregate(bookings, None)

        assert metrics.total_bookings == 2
        assert metrics.total_revenue == Decimal("150")

    def test_input_is_not_modified(self, january_bookings):
        snapshot = [b.model_copy() for b in january_bookings]
        aggregate(january_bookings, 100, JANUARY)
        assert january_bookings == snapshot

    def test_bookings_at_window_edges_are_included(self, booking_factory):
        window = MetricsWindow(start=date(2025, 1, 1), end=date(2025, 1, 3))
        metrics = aggregate([booking_factory(check_in="2025-01-01", check_out="2025-01-03")], 10, window)
        assert metrics.total_bookings == 1
        assert metrics.average_occupancy == Decimal("66.67")


class TestOccupancyRate:
    def test_unbounded_window(self):
        assert occupancy_rate(10, None) == Decimal("0.00")
        assert occupancy_rate(10, MetricsWindow(end=date(2025, 1, 31))) == Decimal("0.00")

    def test_rounds_half_up(self):
        window = MetricsWindow(start=date(2025, 1, 1), end=date(2025, 1, 8))
        assert occupancy_rate(1, window) == Decimal("12.50")


class TestMetricsSchemas:
    """Window validation and breakdown ordering."""

    def test_window_end_before_start(self):
        with pytest.raises(ValidationError):
            MetricsWindow(start=date(2025, 2, 1), end=date(2025, 1, 1))

    def test_span_days_is_inclusive(self):
        assert JANUARY.span_days == 31
        assert MetricsWindow(start=date(2025, 1, 1), end=date(2025, 1, 1)).span_days == 1
        assert MetricsWindow().span_days == 0
        assert MetricsWindow().is_bounded is False

    def test_monthly_breakdown_is_chronological(self):
        metrics = Metrics(
            by_month={
                "2025-03": MonthBucket(count=1),
                "2024-12": MonthBucket(count=2),
                "2025-01": MonthBucket(count=3),
            }
        )
        assert [month for month, _ in metrics.monthly_breakdown()] == ["2024-12", "2025-01", "2025-03"]
