from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from config import settings
from models.listing import ListingCondition
from .types import Money, Price, UrlStr


class ListingBase(BaseModel):
    """Base schema for listing data."""
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code, e.g. USD")
    category: str = Field(..., min_length=1, max_length=50)
    condition: ListingCondition
    location: Optional[str] = Field(None, max_length=100)


class ListingCreate(ListingBase):
    """Schema for creating a new listing."""
    user_id: int = Field(..., description="ID of the seller")
    price: Price
    media_urls: Optional[List[UrlStr]] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "user_id": 1,
                "title": "iPhone 15 Pro",
                "description": "Barely used, comes with the original box",
                "price": 999.99,
                "currency": "USD",
                "category": "electronics",
                "condition": "like_new",
                "location": "New York, NY",
                "media_urls": ["https://example.com/media/iphone.jpg"]
            }
        }
    }


class ListingUpdate(BaseModel):
    """
    Schema for a partial listing update.

    location and media_urls accept an explicit null to clear them; the other
    fields may only be omitted or replaced.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[Price] = None
    condition: Optional[ListingCondition] = None
    location: Optional[str] = Field(None, max_length=100)
    media_urls: Optional[List[UrlStr]] = None
    is_active: Optional[bool] = None

    @field_validator('title', 'description', 'price', 'condition', 'is_active')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('field may be omitted but not set to null')
        return v


class ListingFilters(BaseModel):
    """Optional filters for listing queries. Every filter combines with AND."""
    category: Optional[str] = None
    location: Optional[str] = Field(None, description="Case-insensitive substring match")
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    condition: Optional[ListingCondition] = None
    is_active: Optional[bool] = None
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)
    offset: int = Field(0, ge=0)

    @model_validator(mode='after')
    def validate_price_range(self) -> 'ListingFilters':
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        return self


class SellerListingFilters(BaseModel):
    """Filters for one seller's listings. Unknown query parameters are rejected."""
    is_active: Optional[bool] = None
    category: Optional[str] = None
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)
    offset: int = Field(0, ge=0)

    model_config = {"extra": "forbid"}


class ListingResponse(ListingBase):
    """Schema for listing response."""
    id: int
    user_id: int
    price: Money
    media_urls: Optional[List[str]] = None
    is_active: bool
    view_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
