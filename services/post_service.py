from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from config import settings
from core.errors import NotFoundError
from database import atomic
from models import Like, Post, User
from schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

class PostService:
    """Service for handling post-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_post(self, post_data: PostCreate) -> Post:
        """
        Create a post, or a reply when parent_post_id is set.

        The insert, the author's post_count and the parent's reply_count are
        committed together.

        Args:
            post_data: Validated post payload

        Returns:
            The created post

        Raises:
            NotFoundError: If the author or the parent post does not exist
        """
        if self.db.get(User, post_data.user_id) is None:
            raise NotFoundError("User not found")

        parent_post_id = post_data.parent_post_id
        if parent_post_id is not None and self.db.get(Post, parent_post_id) is None:
            raise NotFoundError("Parent post not found")

        post = Post(**post_data.model_dump(mode="json"))
        now = datetime.utcnow()
        with atomic(self.db):
            self.db.add(post)
            self.db.query(User).filter(User.id == post_data.user_id).update(
                {User.post_count: User.post_count + 1, User.updated_at: now},
                synchronize_session=False
            )
            if parent_post_id is not None:
                self._adjust_reply_count(parent_post_id, 1, now)
        self.db.refresh(post)

        logger.info(f"User {post.user_id} created post {post.id}")
        return post

    def get_posts(self, limit: int = settings.DEFAULT_PAGE_SIZE, offset: int = 0) -> List[Post]:
        """Top-level posts only, newest first."""
        return (
            self.db.query(Post)
            .filter(Post.parent_post_id.is_(None))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_post(self, post_id: int) -> Optional[Post]:
        return self.db.get(Post, post_id)

    def get_posts_by_user(self, user_id: int) -> List[Post]:
        """All posts of a user, replies included, newest first."""
        if self.db.get(User, user_id) is None:
            raise NotFoundError(f"User with id {user_id} does not exist")

        return (
            self.db.query(Post)
            .filter(Post.user_id == user_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .all()
        )

    def get_post_replies(self, post_id: int) -> List[Post]:
        """Direct replies to a post, newest first. Replies to replies are not included."""
        if self.db.get(Post, post_id) is None:
            raise NotFoundError(f"Post with id {post_id} does not exist")

        return (
            self.db.query(Post)
            .filter(Post.parent_post_id == post_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .all()
        )

    def update_post(self, post_id: int, post_data: PostUpdate) -> Post:
        post = self.db.get(Post, post_id)
        if not post:
            raise NotFoundError("Post not found")

        for field, value in post_data.model_dump(exclude_unset=True).items():
            setattr(post, field, value)
        post.updated_at = datetime.utcnow()

        with atomic(self.db):
            self.db.add(post)
        self.db.refresh(post)

        logger.info(f"Updated post {post_id}")
        return post

    def delete_post(self, post_id: int) -> bool:
        """
        Delete a post.

        Its likes are removed and its direct replies are kept but detached
        (they become top-level). The author's post_count and, for a reply, the
        parent's reply_count are decremented in the same transaction.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = self.db.get(Post, post_id)
        if not post:
            raise NotFoundError("Post not found")

        author_id = post.user_id
        parent_post_id = post.parent_post_id
        is_reply = post.is_reply
        now = datetime.utcnow()

        with atomic(self.db):
            self.db.query(Like).filter(Like.post_id == post_id).delete(synchronize_session=False)
            self.db.query(Post).filter(Post.parent_post_id == post_id).update(
                {Post.parent_post_id: None},
                synchronize_session=False
            )
            if is_reply:
                self._adjust_reply_count(parent_post_id, -1, now)
            self.db.query(User).filter(User.id == author_id).update(
                {User.post_count: User.post_count - 1, User.updated_at: now},
                synchronize_session=False
            )
            self.db.query(Post).filter(Post.id == post_id).delete(synchronize_session=False)
        self.db.expunge(post)

        logger.info(f"Deleted post {post_id} of user {author_id}")
        return True

    def _adjust_reply_count(self, post_id: int, delta: int, now: datetime) -> None:
        self.db.query(Post).filter(Post.id == post_id).update(
            {Post.reply_count: Post.reply_count + delta, Post.updated_at: now},
            synchronize_session=False
        )
