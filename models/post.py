from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, Boolean, JSON
from sqlalchemy.orm import relationship

from database import Base

# Import for type checking to avoid circular imports
if TYPE_CHECKING:
    from models.user import User
    from models.like import Like


class Post(Base):
    """Post or reply. A reply points at its parent through parent_post_id."""

    __tablename__ = 'posts'

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    content = Column(Text, nullable=False, comment='Text content of the post')
    media_urls = Column(JSON, nullable=True, comment='List of media URLs')

    like_count = Column(Integer, default=0, nullable=False)
    repost_count = Column(Integer, default=0, nullable=False)
    reply_count = Column(Integer, default=0, nullable=False)

    is_pinned = Column(Boolean, default=False, nullable=False)
    parent_post_id = Column(
        Integer,
        ForeignKey('posts.id', ondelete='SET NULL'),
        nullable=True,
        index=True,
        comment='Set for replies; only direct children are ever queried'
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="posts", foreign_keys=[user_id])
    parent = relationship("Post", remote_side=[id], back_populates="replies")
    replies = relationship("Post", back_populates="parent", passive_deletes=True)
    likes = relationship("Like", back_populates="post", passive_deletes=True)

    @property
    def is_reply(self) -> bool:
        return self.parent_post_id is not None

    def __repr__(self):
        return f"<Post {self.id} by {self.user_id}>"
