"""Repository for AdminMessage database operations."""

import logging
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skillswap.errors import RepositoryError
from skillswap.models.admin_message import AdminMessage
from skillswap.database.models import AdminMessageDB

logger = logging.getLogger(__name__)


class AdminMessageRepository:
    """Repository for broadcast messages."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, message_id: str) -> Optional[AdminMessage]:
        """Get message by ID."""
        try:
            message_db = self.db.query(AdminMessageDB).filter(AdminMessageDB.id == message_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load admin message {message_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to load admin message {message_id}") from e
        return message_db.to_pydantic() if message_db else None

    def list(self, active_only: bool = False) -> List[AdminMessage]:
        """Get messages, newest first."""
        try:
            query = self.db.query(AdminMessageDB)
            if active_only:
                query = query.filter(AdminMessageDB.is_active.is_(True))
            messages_db = query.order_by(desc(AdminMessageDB.created_at)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list admin messages: {type(e).__name__}: {str(e)}")
            raise RepositoryError("Failed to list admin messages") from e
        return [message_db.to_pydantic() for message_db in messages_db]

    def create(self, message: AdminMessage) -> AdminMessage:
        """Create a new message."""
        try:
            message_db = AdminMessageDB.from_pydantic(message)
            self.db.add(message_db)
            self.db.commit()
            self.db.refresh(message_db)
            logger.debug(f"Created admin message {message.id}: {message.title[:50]}")
            return message_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create admin message {message.id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to create admin message {message.id}") from e

    def delete(self, message_id: str) -> bool:
        """Permanently delete a message by ID."""
        try:
            message_db = self.db.query(AdminMessageDB).filter(AdminMessageDB.id == message_id).first()
            if not message_db:
                return False
            self.db.delete(message_db)
            self.db.commit()
            logger.debug(f"Deleted admin message {message_id}")
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete admin message {message_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to delete admin message {message_id}") from e
