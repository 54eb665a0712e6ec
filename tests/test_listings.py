from decimal import Decimal

import pytest

from core.errors import NotFoundError
from models import Listing
from schemas.listing import ListingCreate, ListingFilters, ListingUpdate, SellerListingFilters
from services.listing_service import ListingService


def test_create_listing_stores_exact_price(test_db, create_user):
    seller = create_user()

    listing = ListingService(test_db).create_listing(ListingCreate(
        user_id=seller.id,
        title="Camera",
        description="Film camera",
        price=19.9,
        currency="USD",
        category="photo",
        condition="good"
    ))

    assert listing.price == Decimal("19.90")
    assert listing.is_active is True
    assert listing.view_count == 0
    assert listing.condition == "good"


def test_price_rounding_to_zero_is_rejected():
    with pytest.raises(ValueError, match="must be at least 0.01"):
        ListingCreate(
            user_id=1, title="t", description="d", price=0.004, currency="USD",
            category="c", condition="new"
        )
    with pytest.raises(ValueError):
        ListingUpdate(price=0.004)


def test_price_above_column_precision_is_rejected():
    with pytest.raises(ValueError):
        ListingUpdate(price=1e12)


def test_create_listing_unknown_seller(test_db):
    with pytest.raises(NotFoundError, match="User with id 8 does not exist"):
        ListingService(test_db).create_listing(ListingCreate(
            user_id=8, title="t", description="d", price=1, currency="USD",
            category="c", condition="new"
        ))


def test_get_listing_counts_views(test_db, create_listing):
    listing = create_listing()
    service = ListingService(test_db)

    assert [service.get_listing(listing.id).view_count for _ in range(3)] == [1, 2, 3]


def test_get_missing_listing_returns_none(test_db):
    assert ListingService(test_db).get_listing(1) is None


def test_get_listings_filters(test_db, create_listing):
    cheap = create_listing(price=Decimal("10.00"), category="books", location="Brooklyn, NY")
    mid = create_listing(price=Decimal("50.00"), category="books", location="Austin, TX")
    create_listing(price=Decimal("500.00"), category="electronics", condition="new", location="Seattle, WA")
    service = ListingService(test_db)

    assert [l.id for l in service.get_listings(ListingFilters(category="books"))] == [mid.id, cheap.id]
    assert [l.id for l in service.get_listings(ListingFilters(min_price=10, max_price=50))] == [mid.id, cheap.id]
    assert [l.id for l in service.get_listings(ListingFilters(location="ny"))] == [cheap.id]
    assert [l.condition for l in service.get_listings(ListingFilters(condition="new"))] == ["new"]
    assert len(service.get_listings(ListingFilters(limit=2))) == 2


def test_location_filter_is_literal(test_db, create_listing):
    create_listing(location="Room 100")

    assert ListingService(test_db).get_listings(ListingFilters(location="10%")) == []


def test_filters_reject_inverted_price_range():
    with pytest.raises(ValueError):
        ListingFilters(min_price=10, max_price=5)


def test_get_listings_by_user(test_db, create_user, create_listing):
    seller = create_user()
    active = create_listing(user_id=seller.id)
    inactive = create_listing(user_id=seller.id, is_active=False)
    create_listing()
    service = ListingService(test_db)

    assert [l.id for l in service.get_listings_by_user(seller.id)] == [inactive.id, active.id]
    assert [l.id for l in service.get_listings_by_user(seller.id, SellerListingFilters(is_active=True))] == [active.id]
    assert service.get_listings_by_user(999) == []


def test_search_listings(test_db, create_listing):
    by_title = create_listing(title="iPhone 13", description="Phone")
    by_description = create_listing(title="Phone", description="An IPHONE in good shape")
    create_listing(title="iPhone 12", is_active=False)
    other = create_listing(title="Bicycle", description="Road bike")
    service = ListingService(test_db)

    assert {l.id for l in service.search_listings("iphone")} == {by_title.id, by_description.id}
    assert {l.id for l in service.search_listings("")} == {by_title.id, by_description.id, other.id}
    assert service.search_listings("iphone", category="books") == []


def test_update_listing(test_db, create_listing):
    listing = create_listing(location="Paris")

    updated = ListingService(test_db).update_listing(
        listing.id, ListingUpdate.model_validate({"price": 75.5, "location": None})
    )

    assert updated.price == Decimal("75.50")
    assert updated.location is None
    assert updated.title == "iPhone 15 Pro"


def test_update_listing_rejects_null_title():
    with pytest.raises(ValueError):
        ListingUpdate.model_validate({"title": None})


def test_update_missing_listing(test_db):
    with pytest.raises(NotFoundError, match="Listing with id 4 not found"):
        ListingService(test_db).update_listing(4, ListingUpdate(title="x"))


def test_deactivate_listing_is_idempotent(test_db, create_listing):
    listing = create_listing()
    service = ListingService(test_db)

    assert service.deactivate_listing(listing.id) is True
    assert service.deactivate_listing(listing.id) is True

    test_db.expire_all()
    assert test_db.get(Listing, listing.id).is_active is False


class TestListingEndpoints:
    def test_create_and_get(self, client, create_user):
        seller = create_user()

        response = client.post("/api/v1/listings", json={
            "user_id": seller.id,
            "title": "iPhone 15 Pro",
            "description": "Barely used",
            "price": 999.99,
            "currency": "USD",
            "category": "electronics",
            "condition": "like_new"
        })
        assert response.status_code == 201
        listing_id = response.json()["id"]
        assert response.json()["price"] == 999.99

        response = client.get(f"/api/v1/listings/{listing_id}")
        assert response.status_code == 200
        assert response.json()["view_count"] == 1

    def test_search_route_is_not_an_id(self, client, create_listing):
        create_listing(title="iPhone 15")

        response = client.get("/api/v1/listings/search", params={"query": "IPHONE"})

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_query_filters(self, client, create_listing):
        create_listing(price=Decimal("5.00"))
        create_listing(price=Decimal("15.00"))

        response = client.get("/api/v1/listings", params={"max_price": 10})

        assert response.status_code == 200
        assert [l["price"] for l in response.json()] == [5.0]

    def test_inverted_price_range_is_400(self, client):
        response = client.get("/api/v1/listings", params={"min_price": 10, "max_price": 1})

        assert response.status_code == 400

    def test_deactivate_missing_is_404(self, client):
        response = client.post("/api/v1/listings/3/deactivate")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Listing with id 3 not found"

    def test_sub_cent_price_is_400(self, client, create_user):
        seller = create_user()

        response = client.post("/api/v1/listings", json={
            "user_id": seller.id,
            "title": "Sticker",
            "description": "Tiny",
            "price": 0.004,
            "currency": "USD",
            "category": "misc",
            "condition": "new"
        })

        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["field"] == "body.price"

    def test_seller_listings_accept_only_seller_filters(self, client, create_user, create_listing):
        seller = create_user()
        create_listing(user_id=seller.id, category="books")
        create_listing(user_id=seller.id, category="toys")

        response = client.get(f"/api/v1/listings/by-user/{seller.id}", params={"category": "books"})
        assert response.status_code == 200
        assert [l["category"] for l in response.json()] == ["books"]

        response = client.get(f"/api/v1/listings/by-user/{seller.id}", params={"min_price": 5})
        assert response.status_code == 400
