"""Tests for the remote accommodation mapper."""

from decimal import Decimal

from booking_engine.mappers.accommodation import (
    collection_items,
    listing_from_api,
    listing_to_api,
    summary_from_api,
)


class TestListingFromApi:
    """Field-name fallbacks and service/image translation."""

    def test_primary_field_names(self):
        listing = listing_from_api(
            {
                "id": 10,
                "qualification": "Casa rural",
                "city": "Santander",
                "latitude": 43.46,
                "longitude": -3.8,
                "priceNight": "95.50",
                "maximumCapacity": 4,
                "services": ["WIFI", "POOL", "SAUNA"],
                "images": [
                    {"url": "https://img.example/1.jpg"},
                    {"url": "https://img.example/2.jpg", "isPrincipal": True},
                ],
                "statusAccommodation": "ACTIVE",
                "idHost": 3,
                "averageRating": 4.5,
            }
        )
        assert listing.id == "10"
        assert listing.title == "Casa rural"
        assert listing.nightly_price == Decimal("95.50")
        assert listing.max_guests == 4
        assert listing.services == ["WiFi", "Piscina", "SAUNA"]
        assert listing.main_image == "https://img.example/2.jpg"
        assert listing.status == "ACTIVO"
        assert listing.host_id == "3"
        assert listing.average_rating == 4.5

    def test_fallback_field_names(self):
        listing = listing_from_api(
            {
                "id": 11,
                "title": "Loft",
                "price_night": 60,
                "maximux_capacity_accommodation": 2,
                "typeServicesEnum": ["KITCHEN"],
                "imagesAccommodation": [{"url": "https://img.example/x.jpg"}],
                "ratingPromedio": 3.9,
            }
        )
        assert listing.title == "Loft"
        assert listing.nightly_price == Decimal("60")
        assert listing.max_guests == 2
        assert listing.services == ["Cocina equipada"]
        assert listing.images[0].principal is True
        assert listing.average_rating == 3.9

    def test_defaults(self):
        listing = listing_from_api({"id": 1})
        assert listing.status == "ACTIVO"
        assert listing.max_guests == 1
        assert listing.services == []
        assert listing.main_image is None
        assert listing.average_rating is None

    def test_any_other_status_is_deleted(self):
        assert listing_from_api({"id": 1, "statusAccommodation": "DELETED"}).status == "ELIMINADO"


class TestListingToApi:
    def test_payload(self):
        listing = listing_from_api(
            {
                "id": 10,
                "qualification": "Casa rural",
                "priceNight": 100,
                "services": ["WIFI"],
                "images": [{"url": "https://img.example/1.jpg"}],
            }
        )
        listing = listing.model_copy(update={"services": ["WiFi", "Helipuerto"]})

        payload = listing_to_api(listing, "3")

        assert payload["qualification"] == "Casa rural"
        assert payload["priceNight"] == 100.0
        assert payload["services"] == ["WIFI", "WIFI"]
        assert payload["idHost"] == 3
        assert payload["images"] == [
            {"url": "https://img.example/1.jpg", "isPrincipal": True, "displayOrder": 1}
        ]


class TestSummaryAndCollections:
    def test_summary(self, accommodation_source):
        summary = summary_from_api(accommodation_source.fetch_accommodation.return_value)
        assert summary.title == "Casa rural"
        assert summary.city == "Santander"
        assert summary.nightly_price == Decimal("100")

    def test_collection_shapes(self):
        assert collection_items({"content": [1, 2]}) == [1, 2]
        assert collection_items({"items": [3]}) == [3]
        assert collection_items([4, 5]) == [4, 5]
        assert collection_items(None) == []
        assert collection_items({"content": "oops"}) == []
        assert collection_items(42) == []
