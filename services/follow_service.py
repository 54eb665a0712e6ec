from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from core.errors import ConflictError, NotFoundError, SelfReferenceError
from database import atomic
from models.follow import Follow
from models.user import User

logger = logging.getLogger(__name__)

class FollowService:
    """Service for the follow graph and its follower/following counters."""

    def __init__(self, db: Session):
        self.db = db

    def create_follow(self, follower_id: int, following_id: int) -> Follow:
        """
        Make follower_id follow following_id.

        Args:
            follower_id: ID of the user who follows
            following_id: ID of the user being followed

        Returns:
            The created Follow record

        Raises:
            SelfReferenceError: If both IDs are the same
            NotFoundError: If either user does not exist
            ConflictError: If the relationship already exists
        """
        if follower_id == following_id:
            logger.warning(f"User {follower_id} tried to follow themselves")
            raise SelfReferenceError("Users cannot follow themselves")

        # Checked one by one so the error names the missing user
        for user_id in (follower_id, following_id):
            if self.db.get(User, user_id) is None:
                raise NotFoundError(f"User with id {user_id} does not exist")

        if self.get_follow_relationship(follower_id, following_id):
            raise ConflictError("Follow relationship already exists")

        follow = Follow(follower_id=follower_id, following_id=following_id)
        with atomic(self.db):
            self.db.add(follow)
            self._adjust_counters(follower_id, following_id, 1)
        self.db.refresh(follow)

        logger.info(f"User {follower_id} followed user {following_id}")
        return follow

    def delete_follow(self, follower_id: int, following_id: int) -> bool:
        """
        Remove a follow relationship and roll both counters back.

        Raises:
            NotFoundError: If the relationship does not exist
        """
        follow = self.get_follow_relationship(follower_id, following_id)
        if not follow:
            raise NotFoundError("Follow relationship does not exist")

        with atomic(self.db):
            self.db.delete(follow)
            self._adjust_counters(follower_id, following_id, -1)

        logger.info(f"User {follower_id} unfollowed user {following_id}")
        return True

    def get_follow_relationship(self, follower_id: int, following_id: int) -> Optional[Follow]:
        """Return the follower -> following edge; the reverse edge is not considered."""
        return self.db.query(Follow).filter(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id
        ).first()

    def get_followers(self, user_id: int) -> List[User]:
        """Users following user_id, most recent follow first."""
        self._require_user(user_id)
        return (
            self.db.query(User)
            .join(Follow, Follow.follower_id == User.id)
            .filter(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
            .all()
        )

    def get_following(self, user_id: int) -> List[User]:
        """Users that user_id follows, most recent follow first."""
        self._require_user(user_id)
        return (
            self.db.query(User)
            .join(Follow, Follow.following_id == User.id)
            .filter(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
            .all()
        )

    def _require_user(self, user_id: int) -> None:
        if self.db.get(User, user_id) is None:
            raise NotFoundError(f"User with id {user_id} does not exist")

    def _adjust_counters(self, follower_id: int, following_id: int, delta: int) -> None:
        # Issued as "col = col + delta" so concurrent follows do not lose updates
        self.db.query(User).filter(User.id == follower_id).update(
            {User.following_count: User.following_count + delta},
            synchronize_session=False
        )
        self.db.query(User).filter(User.id == following_id).update(
            {User.follower_count: User.follower_count + delta},
            synchronize_session=False
        )
