from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from core.errors import NotFoundError
from database import atomic
from models.notification import Notification
from models.user import User
from schemas.notification import NotificationCreate, NotificationFilters

logger = logging.getLogger(__name__)

class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    def create_notification(self, notification_data: NotificationCreate) -> Notification:
        """
        Create a new unread notification.

        Raises:
            NotFoundError: If the recipient does not exist
        """
        if self.db.get(User, notification_data.user_id) is None:
            raise NotFoundError(f"User with id {notification_data.user_id} does not exist")

        notification = Notification(**notification_data.model_dump(mode="json"), is_read=False)
        with atomic(self.db):
            self.db.add(notification)
        self.db.refresh(notification)

        logger.info(f"Created {notification.type} notification {notification.id} for user {notification.user_id}")
        return notification

    def get_notifications(self, user_id: int, filters: Optional[NotificationFilters] = None) -> List[Notification]:
        """Get a user's notifications, newest first."""
        filters = filters or NotificationFilters()
        query = self.db.query(Notification).filter(Notification.user_id == user_id)

        if filters.is_read is not None:
            query = query.filter(Notification.is_read == filters.is_read)
        if filters.type is not None:
            query = query.filter(Notification.type == filters.type.value)

        return (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
            .all()
        )

    def mark_as_read(self, notification_id: int) -> bool:
        """Returns False when the notification does not exist."""
        with atomic(self.db):
            updated = self.db.query(Notification).filter(
                Notification.id == notification_id
            ).update({Notification.is_read: True}, synchronize_session=False)
        return updated > 0

    def mark_all_as_read(self, user_id: int) -> bool:
        if self.db.get(User, user_id) is None:
            raise NotFoundError(f"User with id {user_id} does not exist")

        with atomic(self.db):
            updated = self.db.query(Notification).filter(
                Notification.user_id == user_id,
                Notification.is_read.is_(False)
            ).update({Notification.is_read: True}, synchronize_session=False)

        logger.info(f"Marked {updated} notifications read for user {user_id}")
        return True

    def get_unread_count(self, user_id: int) -> int:
        return self.db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False)
        ).count()
