from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import relationship

from database import Base

# Import for type checking to avoid circular imports
if TYPE_CHECKING:
    from .user import User

class Follow(Base):
    """Directed follow edge: follower_id follows following_id."""
    __tablename__ = 'follows'

    id = Column(Integer, primary_key=True, index=True)
    follower_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    following_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Use string-based references to avoid circular imports
    follower = relationship("User", foreign_keys=[follower_id], back_populates="following_relationships")
    following = relationship("User", foreign_keys=[following_id], back_populates="follower_relationships")

    __table_args__ = (UniqueConstraint('follower_id', 'following_id', name='_follower_following_uc'),)

    def __repr__(self):
        return f"<Follow {self.follower_id} -> {self.following_id}>"
