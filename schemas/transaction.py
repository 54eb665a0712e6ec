from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .types import Money, Price


class TransactionCreate(BaseModel):
    """Schema for starting a purchase of a listing."""
    listing_id: int
    buyer_id: int
    seller_id: int = Field(..., description="Must be the owner of the listing")
    amount: Price = Field(..., description="Must equal the listing price")
    currency: str = Field(..., min_length=3, max_length=3, description="Must equal the listing currency")
    payment_method: Optional[str] = Field(None, max_length=50)

    model_config = {
        "json_schema_extra": {
            "example": {
                "listing_id": 1,
                "buyer_id": 2,
                "seller_id": 1,
                "amount": 99.99,
                "currency": "USD",
                "payment_method": "credit_card"
            }
        }
    }


class TransactionStatusUpdate(BaseModel):
    """New status for a transaction. Any non-empty string is accepted."""
    status: str = Field(..., min_length=1, max_length=20)


class TransactionResponse(BaseModel):
    """Schema for transaction response."""
    id: int
    listing_id: int
    buyer_id: int
    seller_id: int
    amount: Money
    currency: str
    status: str
    payment_method: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
