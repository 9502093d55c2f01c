"""Unit tests for the booking status vocabulary."""

from datetime import datetime, timezone

import pytest

from booking_engine.services.status import (
    CANCELADA,
    COMPLETADA,
    CONFIRMADA,
    DOMAIN_STATUSES,
    PENDIENTE,
    can_cancel,
    normalize_status,
    to_domain,
    to_remote,
)


class TestToDomain:
    """Remote -> domain mapping."""

    @pytest.mark.parametrize(
        ("remote", "domain"),
        [
            ("PENDING", PENDIENTE),
            ("CONFIRMED", CONFIRMADA),
            ("PAID", CONFIRMADA),
            ("CANCELED", CANCELADA),
            ("COMPLETED", COMPLETADA),
        ],
    )
    def test_mapping_table(self, remote, domain):
        assert to_domain(remote) == domain

    def test_unknown_value_passes_through(self):
        assert to_domain("REFUNDED") == "REFUNDED"

    def test_domain_values_are_idempotent(self):
        for status in DOMAIN_STATUSES:
            assert to_domain(status) == status


class TestToRemote:
    """Domain -> remote mapping (lossy)."""

    def test_confirmada_goes_out_as_confirmed(self):
        assert to_remote(CONFIRMADA) == "CONFIRMED"

    def test_round_trip_for_every_domain_status(self):
        for status in DOMAIN_STATUSES:
            assert to_domain(to_remote(status)) == status

    def test_paid_is_not_reachable_from_domain(self):
        assert "PAID" not in {to_remote(status) for status in DOMAIN_STATUSES}

    def test_missing_inverse_is_none(self):
        assert to_remote("PAID") is None
        assert to_remote("ANYTHING") is None


class TestNormalizeStatus:
    """Status normalization returns new values."""

    def test_returns_copy_with_domain_status(self, booking_factory):
        original = booking_factory(status="PAID")
        normalized = normalize_status(original)
        assert normalized.status == CONFIRMADA
        assert original.status == "PAID"
        assert normalized.id == original.id

    def test_already_normalized_is_returned_as_is(self, booking_factory):
        booking = booking_factory(status=PENDIENTE)
        assert normalize_status(booking) is booking


class TestCanCancel:
    """Cancellation cutoff before check-in (14:00 local)."""

    def test_pending_well_ahead(self, booking_factory):
        booking = booking_factory(check_in="2025-01-10", check_out="2025-01-12", status=PENDIENTE)
        assert can_cancel(booking, now=datetime(2025, 1, 5, 9, 0)) is True

    def test_inside_cutoff(self, booking_factory):
        booking = booking_factory(check_in="2025-01-10", check_out="2025-01-12")
        assert can_cancel(booking, now=datetime(2025, 1, 9, 9, 0)) is False

    def test_exactly_at_cutoff(self, booking_factory):
        booking = booking_factory(check_in="2025-01-10", check_out="2025-01-12")
        assert can_cancel(booking, now=datetime(2025, 1, 8, 14, 0)) is True
        assert can_cancel(booking, now=datetime(2025, 1, 8, 14, 1)) is False

    def test_aware_now_is_compared_in_local_zone(self, booking_factory):
        """13:00 UTC is 14:00 in Madrid in January: exactly 48 hours ahead."""
        booking = booking_factory(check_in="2025-01-10", check_out="2025-01-12")
        assert can_cancel(booking, now=datetime(2025, 1, 8, 13, 0, tzinfo=timezone.utc)) is True

    @pytest.mark.parametrize("status", [CANCELADA, COMPLETADA, "CANCELED"])
    def test_closed_statuses(self, booking_factory, status):
        booking = booking_factory(check_in="2025-06-10", check_out="2025-06-12", status=status)
        assert can_cancel(booking, now=datetime(2025, 1, 1)) is False

    def test_custom_cutoff(self, booking_factory):
        booking = booking_factory(check_in="2025-01-10", check_out="2025-01-12")
        assert can_cancel(booking, now=datetime(2025, 1, 9, 9, 0), cutoff_hours=0) is True
