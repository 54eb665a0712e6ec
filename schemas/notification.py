from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from config import settings
from models.notification import NotificationType


class NotificationBase(BaseModel):
    """Base schema for notifications."""
    user_id: int
    type: NotificationType
    title: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=500)
    related_id: Optional[int] = None  # ID of the related entity (post, user, transaction)


class NotificationCreate(NotificationBase):
    """Schema for creating a new notification."""
    pass


class NotificationFilters(BaseModel):
    """Filters and pagination for a user's notifications."""
    is_read: Optional[bool] = None
    type: Optional[NotificationType] = None
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)
    offset: int = Field(0, ge=0)


class Notification(NotificationBase):
    """Schema for notification response."""
    id: int
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}
