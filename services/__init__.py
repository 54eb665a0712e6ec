"""
Services package for the application.

This package contains the service classes that hold the business rules:
referential checks, relationship uniqueness and the denormalized counters.
"""
from .user_service import UserService
from .post_service import PostService
from .listing_service import ListingService
from .follow_service import FollowService
from .like_service import LikeService
from .transaction_service import TransactionService
from .notification_service import NotificationService

__all__ = [
    'UserService',
    'PostService',
    'ListingService',
    'FollowService',
    'LikeService',
    'TransactionService',
    'NotificationService',
]
