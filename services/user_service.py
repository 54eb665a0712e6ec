from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from database import atomic
from models.user import User
from schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

class UserService:
    """Service for handling user-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, user_data: UserCreate) -> User:
        """
        Create a user with all counters at zero.

        Duplicate usernames or e-mails are rejected by the unique constraints;
        the resulting IntegrityError propagates to the caller.
        """
        user = User(**user_data.model_dump(mode="json"))
        with atomic(self.db):
            self.db.add(user)
        self.db.refresh(user)

        logger.info(f"Created user {user.id} ({user.username})")
        return user

    def get_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """
        Look a user up by username, ignoring case.

        Compares lowercased values instead of using ILIKE so that underscores
        in usernames are matched literally.
        """
        return self.db.query(User).filter(
            func.lower(User.username) == username.lower()
        ).first()

    def update_user(self, user_id: int, user_data: UserUpdate) -> User:
        """
        Apply a partial profile update.

        Args:
            user_id: ID of the user to update
            user_data: Fields to change; fields not sent are left untouched

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
        """
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError(f"User with id {user_id} not found")

        for field, value in user_data.model_dump(exclude_unset=True, mode="json").items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()

        with atomic(self.db):
            self.db.add(user)
        self.db.refresh(user)

        logger.info(f"Updated user {user_id}")
        return user
