"""Booking & metrics aggregation engine for a booking-platform client."""

__version__ = "0.1.0"
