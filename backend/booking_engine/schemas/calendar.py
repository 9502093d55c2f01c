"""Calendar overlay schema."""

from pydantic import BaseModel, ConfigDict


class CalendarDay(BaseModel):
    """A single cell of a month grid."""

    day: int
    date: str  # ISO YYYY-MM-DD
    is_occupied: bool
    is_past: bool

    model_config = ConfigDict(frozen=True)

    @property
    def is_free(self) -> bool:
        return not (self.is_occupied or self.is_past)
