from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from .types import UrlStr


class UserBase(BaseModel):
    """Base schema for user data."""
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)


class UserCreate(UserBase):
    """Schema for creating a new user."""
    avatar_url: Optional[UrlStr] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "jane_doe",
                "email": "jane@example.com",
                "display_name": "Jane Doe",
                "bio": "Vintage camera collector",
                "avatar_url": "https://example.com/avatars/jane.jpg"
            }
        }
    }


class UserUpdate(BaseModel):
    """
    Schema for a partial profile update.

    Only fields present in the request are written; an explicit null clears
    the stored value.
    """
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    avatar_url: Optional[UrlStr] = None


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    avatar_url: Optional[str] = None
    is_verified: bool
    follower_count: int
    following_count: int
    post_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
