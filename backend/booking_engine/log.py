"""Process-wide logging setup."""

import logging

from booking_engine.config import settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once so all booking_engine.* loggers share a format."""
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _configured = True
