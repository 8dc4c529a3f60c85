"""Repository for User database operations."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from skillswap.errors import NotFoundError, RepositoryError, ValidationError
from skillswap.models.user import User
from skillswap.database.models import UserDB

logger = logging.getLogger(__name__)

# Fields a caller may change through update(); id and created_at are immutable.
UPDATABLE_FIELDS = frozenset({
    "name",
    "email",
    "location",
    "profile_photo",
    "skills_offered",
    "skills_wanted",
    "availability",
    "is_public",
    "is_banned",
    "is_admin",
    "rating",
    "total_swaps",
    "updated_at",
})


class UserRepository:
    """Repository for User database operations (the skill/user directory)."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        try:
            user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load user {user_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to load user {user_id}") from e
        return user_db.to_pydantic() if user_db else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        try:
            user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load user by email: {type(e).__name__}: {str(e)}")
            raise RepositoryError("Failed to load user by email") from e
        return user_db.to_pydantic() if user_db else None

    def list(self) -> List[User]:
        """Get all users in directory order (oldest first, then by id)."""
        try:
            users_db = self.db.query(UserDB).order_by(UserDB.created_at, UserDB.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list users: {type(e).__name__}: {str(e)}")
            raise RepositoryError("Failed to list users") from e
        return [user_db.to_pydantic() for user_db in users_db]

    def create(self, user: User) -> User:
        """Create a new user."""
        try:
            user_db = UserDB.from_pydantic(user)
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user.id}: {user.name}")
            return user_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user {user.id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to create user {user.id}") from e

    def update(self, user_id: str, partial: Dict[str, Any]) -> User:
        """Apply a partial update and return the stored post-write user.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If a field is not updatable or a value is invalid
        """
        unknown = set(partial) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

        current = self.get(user_id)
        if current is None:
            raise NotFoundError(f"User {user_id} not found")

        changes = {**partial}
        changes.setdefault("updated_at", datetime.utcnow())
        try:
            merged = User(**{**current.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        replacement = UserDB.from_pydantic(merged)
        try:
            user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
            for field in changes:
                setattr(user_db, field, getattr(replacement, field))
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user_id}: {sorted(changes)}")
            return user_db.to_pydantic()
        except IntegrityError as e:
            # Unique email is the only constraint a partial update can break.
            self.db.rollback()
            logger.warning(f"Rejected update of user {user_id}: {type(e).__name__}")
            raise ValidationError("Email already registered") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to update user {user_id}") from e

    def set_banned(self, user_id: str, banned: bool) -> User:
        """Set the ban flag for a user."""
        return self.update(user_id, {"is_banned": banned})
