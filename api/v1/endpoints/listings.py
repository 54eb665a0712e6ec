from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.listing import (
    ListingCreate, ListingFilters, ListingResponse, ListingUpdate, SellerListingFilters
)
from services.listing_service import ListingService

router = APIRouter(prefix="/listings", tags=["Marketplace"])


@router.post(
    "",
    response_model=ListingResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createListing",
    responses={404: {"description": "Seller not found"}}
)
def create_listing(listing_in: ListingCreate, db: Session = Depends(get_db)):
    return ListingService(db).create_listing(listing_in)


@router.get("", response_model=List[ListingResponse], operation_id="getListings")
def get_listings(
    filters: Annotated[ListingFilters, Query()],
    db: Session = Depends(get_db)
):
    """Listings matching every given filter, newest first."""
    return ListingService(db).get_listings(filters)


@router.get("/search", response_model=List[ListingResponse], operation_id="searchListings")
def search_listings(
    query: str = Query("", description="Matched against title and description"),
    category: Optional[str] = None,
    location: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """Active listings only. An empty query matches all of them."""
    return ListingService(db).search_listings(query, category=category, location=location)


@router.get("/by-user/{user_id}", response_model=List[ListingResponse], operation_id="getListingsByUserId")
def get_listings_by_user_id(
    user_id: int,
    filters: Annotated[SellerListingFilters, Query()],
    db: Session = Depends(get_db)
):
    """Filter by is_active and category; other filters are rejected."""
    return ListingService(db).get_listings_by_user(user_id, filters)


@router.get("/{listing_id}", response_model=Optional[ListingResponse], operation_id="getListingById")
def get_listing_by_id(listing_id: int, db: Session = Depends(get_db)):
    """Each successful fetch counts as one view."""
    return ListingService(db).get_listing(listing_id)


@router.patch("/{listing_id}", response_model=ListingResponse, operation_id="updateListing")
def update_listing(listing_id: int, listing_in: ListingUpdate, db: Session = Depends(get_db)):
    return ListingService(db).update_listing(listing_id, listing_in)


@router.post("/{listing_id}/deactivate", response_model=bool, operation_id="deactivateListing")
def deactivate_listing(listing_id: int, db: Session = Depends(get_db)):
    return ListingService(db).deactivate_listing(listing_id)
