from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.notification import Notification, NotificationCreate, NotificationFilters
from services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post(
    "",
    response_model=Notification,
    status_code=status.HTTP_201_CREATED,
    operation_id="createNotification"
)
def create_notification(notification_in: NotificationCreate, db: Session = Depends(get_db)):
    return NotificationService(db).create_notification(notification_in)


@router.post("/{notification_id}/read", response_model=bool, operation_id="markNotificationAsRead")
def mark_notification_as_read(notification_id: int, db: Session = Depends(get_db)):
    """Returns false when the notification does not exist."""
    return NotificationService(db).mark_as_read(notification_id)


@router.post(
    "/users/{user_id}/read-all",
    response_model=bool,
    operation_id="markAllNotificationsAsRead"
)
def mark_all_notifications_as_read(user_id: int, db: Session = Depends(get_db)):
    return NotificationService(db).mark_all_as_read(user_id)


@router.get(
    "/users/{user_id}",
    response_model=List[Notification],
    operation_id="getNotificationsByUserId"
)
def get_notifications_by_user_id(
    user_id: int,
    filters: Annotated[NotificationFilters, Query()],
    db: Session = Depends(get_db)
):
    return NotificationService(db).get_notifications(user_id, filters)


@router.get(
    "/users/{user_id}/unread-count",
    response_model=int,
    operation_id="getUnreadNotificationCount"
)
def get_unread_notification_count(user_id: int, db: Session = Depends(get_db)):
    return NotificationService(db).get_unread_count(user_id)
