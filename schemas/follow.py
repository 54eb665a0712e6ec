from pydantic import BaseModel, Field
from datetime import datetime


class FollowCreate(BaseModel):
    """Schema for creating a follow relationship."""
    follower_id: int = Field(..., description="ID of the user who follows")
    following_id: int = Field(..., description="ID of the user being followed")


class FollowResponse(BaseModel):
    """Response model for a follow relationship."""
    id: int
    follower_id: int
    following_id: int
    created_at: datetime

    model_config = {"from_attributes": True}
