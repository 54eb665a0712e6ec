from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship

from database import Base

# Import for type checking to avoid circular imports
if TYPE_CHECKING:
    from .post import Post
    from .listing import Listing
    from .follow import Follow
    from .like import Like
    from .notification import Notification


class User(Base):
    """User profile with denormalized social counters."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    display_name = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(Text, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Maintained by the follow and post services, never recomputed on read
    follower_count = Column(Integer, default=0, nullable=False)
    following_count = Column(Integer, default=0, nullable=False)
    post_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships - using string-based references to avoid circular imports
    posts = relationship("Post", back_populates="owner", foreign_keys="Post.user_id")
    listings = relationship("Listing", back_populates="seller")
    likes = relationship("Like", back_populates="user")
    notifications = relationship("Notification", back_populates="user")

    # Follow edges pointing at this user / leaving this user
    follower_relationships = relationship(
        "Follow",
        foreign_keys="[Follow.following_id]",
        back_populates="following",
    )
    following_relationships = relationship(
        "Follow",
        foreign_keys="[Follow.follower_id]",
        back_populates="follower",
    )

    def __repr__(self):
        return f"<User {self.id} {self.username!r}>"
