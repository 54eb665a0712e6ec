import logging

from sqlalchemy.orm import Session

from core.errors import ConflictError, NotFoundError
from database import atomic
from models.like import Like
from models.post import Post
from models.user import User

logger = logging.getLogger(__name__)

class LikeService:
    """Service for post likes and the post like_count."""

    def __init__(self, db: Session):
        self.db = db

    def create_like(self, user_id: int, post_id: int) -> Like:
        """
        Like a post.

        Raises:
            NotFoundError: If the user or the post does not exist (user first)
            ConflictError: If the user already likes the post
        """
        if self.db.get(User, user_id) is None:
            raise NotFoundError("User not found")
        if self.db.get(Post, post_id) is None:
            raise NotFoundError("Post not found")

        if self._find(user_id, post_id):
            raise ConflictError("Like already exists")

        like = Like(user_id=user_id, post_id=post_id)
        with atomic(self.db):
            self.db.add(like)
            self._adjust_like_count(post_id, 1)
        self.db.refresh(like)

        logger.info(f"User {user_id} liked post {post_id}")
        return like

    def delete_like(self, user_id: int, post_id: int) -> bool:
        """
        Remove a like.

        Raises:
            NotFoundError: If the like does not exist
        """
        like = self._find(user_id, post_id)
        if not like:
            raise NotFoundError("Like not found")

        with atomic(self.db):
            self.db.delete(like)
            self._adjust_like_count(post_id, -1)

        logger.info(f"User {user_id} unliked post {post_id}")
        return True

    def _find(self, user_id: int, post_id: int):
        return self.db.query(Like).filter(
            Like.user_id == user_id,
            Like.post_id == post_id
        ).first()

    def _adjust_like_count(self, post_id: int, delta: int) -> None:
        self.db.query(Post).filter(Post.id == post_id).update(
            {Post.like_count: Post.like_count + delta},
            synchronize_session=False
        )
