"""Pydantic v2 schemas for accommodation listings and search filters."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from booking_engine.schemas.booking import AccommodationSummary

LISTING_ACTIVE = "ACTIVO"
LISTING_DELETED = "ELIMINADO"


class ListingImage(BaseModel):
    url: str
    principal: bool = False

    model_config = ConfigDict(frozen=True)


class Listing(BaseModel):
    """Accommodation as seen by search and detail views."""

    id: str
    title: str
    description: str = ""
    city: str = ""
    address: str = ""
    lat: float = 0.0
    lng: float = 0.0
    nightly_price: Decimal = Field(Decimal("0"), ge=0)
    max_guests: int = Field(1, ge=1)
    services: list[str] = Field(default_factory=list)
    images: list[ListingImage] = Field(default_factory=list)
    status: str = Field(LISTING_ACTIVE, pattern=f"^({LISTING_ACTIVE}|{LISTING_DELETED})$")
    host_id: str = ""
    average_rating: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def main_image(self) -> str | None:
        """URL of the principal image, falling back to the first one."""
        for image in self.images:
            if image.principal:
                return image.url
        return self.images[0].url if self.images else None

    def summary(self) -> AccommodationSummary:
        return AccommodationSummary(
            title=self.title,
            city=self.city,
            nightly_price=self.nightly_price,
            main_image=self.main_image,
        )


class ListingFilters(BaseModel):
    """Search form filters. All optional."""

    city: str | None = None
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)
    services: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
