from .user import UserBase, UserCreate, UserUpdate, UserResponse
from .post import PostBase, PostCreate, PostUpdate, PostResponse
from .listing import (
    ListingBase, ListingCreate, ListingUpdate, ListingFilters, SellerListingFilters, ListingResponse
)
from .follow import FollowCreate, FollowResponse
from .like import LikeCreate, LikeResponse
from .transaction import TransactionCreate, TransactionStatusUpdate, TransactionResponse
from .notification import (
    Notification, NotificationBase, NotificationCreate, NotificationFilters
)

__all__ = [
    # User models
    'UserBase', 'UserCreate', 'UserUpdate', 'UserResponse',

    # Post models
    'PostBase', 'PostCreate', 'PostUpdate', 'PostResponse',

    # Listing models
    'ListingBase', 'ListingCreate', 'ListingUpdate', 'ListingFilters', 'SellerListingFilters',
    'ListingResponse',

    # Social graph models
    'FollowCreate', 'FollowResponse', 'LikeCreate', 'LikeResponse',

    # Transaction models
    'TransactionCreate', 'TransactionStatusUpdate', 'TransactionResponse',

    # Notification models
    'Notification', 'NotificationBase', 'NotificationCreate', 'NotificationFilters',
]
