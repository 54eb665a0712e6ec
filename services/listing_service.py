from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from core.errors import NotFoundError
from database import atomic
from models.listing import Listing
from models.user import User
from schemas.listing import ListingCreate, ListingFilters, ListingUpdate, SellerListingFilters
from schemas.types import to_cents

logger = logging.getLogger(__name__)


def _contains(term: str) -> str:
    """LIKE pattern matching term literally anywhere in the value."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ListingService:
    """Service for marketplace listings."""

    def __init__(self, db: Session):
        self.db = db

    def create_listing(self, listing_data: ListingCreate) -> Listing:
        """
        Create a listing for an existing seller.

        Args:
            listing_data: Validated listing payload

        Returns:
            The created listing, active with view_count 0

        Raises:
            NotFoundError: If the seller does not exist
        """
        if self.db.get(User, listing_data.user_id) is None:
            raise NotFoundError(f"User with id {listing_data.user_id} does not exist")

        data = listing_data.model_dump(mode="json")
        data["price"] = to_cents(listing_data.price)
        listing = Listing(**data)

        with atomic(self.db):
            self.db.add(listing)
        self.db.refresh(listing)

        logger.info(f"User {listing.user_id} created listing {listing.id}")
        return listing

    def get_listings(self, filters: Optional[ListingFilters] = None) -> List[Listing]:
        filters = filters or ListingFilters()
        query = self._apply_filters(self.db.query(Listing), filters)
        return self._page(query, filters)

    def get_listing(self, listing_id: int) -> Optional[Listing]:
        """
        Fetch a listing and count the view.

        The view_count increment is committed before the listing is returned.
        """
        listing = self.db.get(Listing, listing_id)
        if listing is None:
            return None

        with atomic(self.db):
            self.db.query(Listing).filter(Listing.id == listing_id).update(
                {Listing.view_count: Listing.view_count + 1, Listing.updated_at: datetime.utcnow()},
                synchronize_session=False
            )
        self.db.refresh(listing)
        return listing

    def get_listings_by_user(self, user_id: int, filters: Optional[SellerListingFilters] = None) -> List[Listing]:
        """A seller's listings; an unknown seller simply has none."""
        filters = filters or SellerListingFilters()
        query = self.db.query(Listing).filter(Listing.user_id == user_id)
        if filters.is_active is not None:
            query = query.filter(Listing.is_active == filters.is_active)
        if filters.category:
            query = query.filter(Listing.category == filters.category)
        return self._page(query, filters)

    def search_listings(
        self,
        query: str,
        category: Optional[str] = None,
        location: Optional[str] = None
    ) -> List[Listing]:
        """
        Search active listings by title or description.

        Matching is a case-insensitive substring test; an empty query matches
        every active listing.
        """
        q = self.db.query(Listing).filter(Listing.is_active.is_(True))
        if query:
            pattern = _contains(query)
            q = q.filter(or_(
                Listing.title.ilike(pattern, escape="\\"),
                Listing.description.ilike(pattern, escape="\\")
            ))
        if category:
            q = q.filter(Listing.category == category)
        if location:
            q = q.filter(Listing.location.ilike(_contains(location), escape="\\"))
        return q.order_by(Listing.created_at.desc(), Listing.id.desc()).all()

    def update_listing(self, listing_id: int, listing_data: ListingUpdate) -> Listing:
        listing = self.db.get(Listing, listing_id)
        if not listing:
            raise NotFoundError(f"Listing with id {listing_id} not found")

        update_data = listing_data.model_dump(exclude_unset=True, mode="json")
        if "price" in update_data:
            update_data["price"] = to_cents(listing_data.price)

        for field, value in update_data.items():
            setattr(listing, field, value)
        listing.updated_at = datetime.utcnow()

        with atomic(self.db):
            self.db.add(listing)
        self.db.refresh(listing)

        logger.info(f"Updated listing {listing_id}: {sorted(update_data)}")
        return listing

    def deactivate_listing(self, listing_id: int) -> bool:
        """Mark a listing inactive. Deactivating twice is not an error."""
        listing = self.db.get(Listing, listing_id)
        if not listing:
            raise NotFoundError(f"Listing with id {listing_id} not found")

        listing.is_active = False
        listing.updated_at = datetime.utcnow()
        with atomic(self.db):
            self.db.add(listing)

        logger.info(f"Deactivated listing {listing_id}")
        return True

    def _apply_filters(self, query: Query, filters: ListingFilters) -> Query:
        if filters.category:
            query = query.filter(Listing.category == filters.category)
        if filters.location:
            query = query.filter(Listing.location.ilike(_contains(filters.location), escape="\\"))
        if filters.min_price is not None:
            query = query.filter(Listing.price >= to_cents(filters.min_price))
        if filters.max_price is not None:
            query = query.filter(Listing.price <= to_cents(filters.max_price))
        if filters.condition is not None:
            query = query.filter(Listing.condition == filters.condition.value)
        if filters.is_active is not None:
            query = query.filter(Listing.is_active == filters.is_active)
        return query

    @staticmethod
    def _page(query: Query, filters) -> List[Listing]:
        return (
            query.order_by(Listing.created_at.desc(), Listing.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
            .all()
        )
