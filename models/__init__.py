"""
Models package for the application.

This package contains all SQLAlchemy models for the application.
"""

# Import all models here to make them available when importing from models
from .user import User
from .post import Post
from .listing import Listing, ListingCondition
from .follow import Follow
from .like import Like
from .transaction import Transaction, TransactionStatus
from .notification import Notification, NotificationType

__all__ = [
    'User',
    'Post',
    'Listing',
    'ListingCondition',
    'Follow',
    'Like',
    'Transaction',
    'TransactionStatus',
    'Notification',
    'NotificationType',
]
