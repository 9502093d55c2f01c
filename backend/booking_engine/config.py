"""Engine configuration using pydantic-settings."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Calendar
    timezone: str = "Europe/Madrid"
    check_in_hour: int = 14
    check_out_hour: int = 12

    # Pagination
    default_page_size: int = 10
    bulk_page_size: int = 1000  # bulk fetch size before in-memory paging

    # Bookings
    cancellation_cutoff_hours: int = 48

    # Metrics
    metrics_default_months: int = 3

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        """Reject zone names the IANA database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @field_validator("check_in_hour", "check_out_hour")
    @classmethod
    def _valid_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ValueError("hours must be between 0 and 23")
        return value

    @model_validator(mode="after")
    def _validate_sizes(self) -> "Settings":
        """Page sizes and windows must be positive."""
        if self.default_page_size < 1 or self.bulk_page_size < 1:
            raise ValueError("page sizes must be >= 1")
        if self.metrics_default_months < 1:
            raise ValueError("metrics_default_months must be >= 1")
        if self.cancellation_cutoff_hours < 0:
            raise ValueError("cancellation_cutoff_hours must be >= 0")
        return self

    @property
    def zone(self) -> ZoneInfo:
        """The configured local zone as a tzinfo object."""
        return ZoneInfo(self.timezone)


settings = Settings()
