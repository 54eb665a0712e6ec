"""
API v1 endpoints package.

One module per resource; each router carries its own prefix.
"""
from fastapi import APIRouter

from . import follows
from . import likes
from . import listings
from . import notifications
from . import posts
from . import transactions
from . import users

# Create a router for all v1 endpoints
router = APIRouter()

router.include_router(users.router)
router.include_router(posts.router)
router.include_router(follows.router)
router.include_router(likes.router)
router.include_router(listings.router)
router.include_router(transactions.router)
router.include_router(notifications.router)

__all__ = [
    'router',
    'follows',
    'likes',
    'listings',
    'notifications',
    'posts',
    'transactions',
    'users',
]
