from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .types import UrlStr


class PostBase(BaseModel):
    """Base schema for post data."""
    content: str = Field(..., min_length=1, max_length=280)


class PostCreate(PostBase):
    """Schema for creating a new post or a reply."""
    user_id: int = Field(..., description="ID of the author")
    media_urls: Optional[List[UrlStr]] = Field(None, description="URLs of attached media")
    parent_post_id: Optional[int] = Field(
        None,
        description="ID of the post being replied to; omit for a top-level post"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "user_id": 1,
                "content": "Check out this amazing view!",
                "media_urls": ["https://example.com/media/12345.jpg"],
                "parent_post_id": None
            }
        }
    }


class PostUpdate(BaseModel):
    """Schema for updating an existing post. Absent fields are left untouched."""
    content: Optional[str] = Field(None, min_length=1, max_length=280)
    is_pinned: Optional[bool] = None

    @field_validator('content', 'is_pinned')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('field may be omitted but not set to null')
        return v


class PostResponse(PostBase):
    """Schema for post response."""
    id: int
    user_id: int
    media_urls: Optional[List[str]] = None
    like_count: int
    repost_count: int
    reply_count: int
    is_pinned: bool
    parent_post_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
