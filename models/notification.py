import datetime
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.orm import relationship
from database import Base


class NotificationType(str, Enum):
    """Types of notifications."""
    LIKE = "like"
    FOLLOW = "follow"
    MENTION = "mention"
    REPLY = "reply"
    TRANSACTION = "transaction"


class Notification(Base):
    __tablename__ = 'notifications'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True) # e.g., 'like', 'follow', 'transaction'
    title = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    related_id = Column(Integer, nullable=True) # id of the post, user or transaction, read by the client
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="notifications")
