"""Repository for SwapRequest database operations."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import desc, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skillswap.errors import NotFoundError, RepositoryError, ValidationError
from skillswap.models.swap_request import SwapRequest, SwapStatus
from skillswap.database.models import SwapRequestDB, UserDB, enum_to_value

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"skill_offered", "skill_wanted", "message", "status", "updated_at"})


class SwapRequestRepository:
    """Repository for SwapRequest database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, request_id: str) -> Optional[SwapRequest]:
        """Get swap request by ID."""
        try:
            request_db = self.db.query(SwapRequestDB).filter(SwapRequestDB.id == request_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load swap request {request_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to load swap request {request_id}") from e
        return request_db.to_pydantic() if request_db else None

    def list_by_user(self, user_id: str) -> List[SwapRequest]:
        """Get every request the user sent or received, newest first."""
        try:
            requests_db = self.db.query(SwapRequestDB).filter(
                or_(SwapRequestDB.from_user_id == user_id, SwapRequestDB.to_user_id == user_id)
            ).order_by(desc(SwapRequestDB.created_at)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list swap requests for user {user_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to list swap requests for user {user_id}") from e
        return [request_db.to_pydantic() for request_db in requests_db]

    def list_all(self) -> List[SwapRequest]:
        """Get all swap requests, newest first (admin view)."""
        try:
            requests_db = self.db.query(SwapRequestDB).order_by(desc(SwapRequestDB.created_at)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list swap requests: {type(e).__name__}: {str(e)}")
            raise RepositoryError("Failed to list swap requests") from e
        return [request_db.to_pydantic() for request_db in requests_db]

    def create(self, request: SwapRequest) -> SwapRequest:
        """Create a new swap request."""
        try:
            request_db = SwapRequestDB.from_pydantic(request)
            self.db.add(request_db)
            self.db.commit()
            self.db.refresh(request_db)
            logger.debug(f"Created swap request {request.id}: {request.from_user_id} -> {request.to_user_id}")
            return request_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create swap request {request.id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to create swap request {request.id}") from e

    def update(self, request_id: str, partial: Dict[str, Any]) -> SwapRequest:
        """Apply a partial update and return the stored post-write request.

        Status changes made by the lifecycle go through transition_status() instead,
        which guards against concurrent writers.
        """
        unknown = set(partial) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update swap request fields: {', '.join(sorted(unknown))}")

        current = self.get(request_id)
        if current is None:
            raise NotFoundError(f"Swap request {request_id} not found")

        changes = {**partial}
        changes.setdefault("updated_at", datetime.utcnow())
        try:
            merged = SwapRequest(**{**current.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        replacement = SwapRequestDB.from_pydantic(merged)
        try:
            request_db = self.db.query(SwapRequestDB).filter(SwapRequestDB.id == request_id).first()
            for field in changes:
                setattr(request_db, field, getattr(replacement, field))
            self.db.commit()
            self.db.refresh(request_db)
            logger.debug(f"Updated swap request {request_id}: {sorted(changes)}")
            return request_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update swap request {request_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to update swap request {request_id}") from e

    def transition_status(
        self,
        request_id: str,
        expected: SwapStatus,
        new: SwapStatus,
        updated_at: datetime,
        credit_user_ids: Iterable[str] = (),
    ) -> Optional[SwapRequest]:
        """Conditionally move a request from `expected` to `new` status.

        The status write and the total_swaps increments for `credit_user_ids` are
        committed together. Nothing is written when the stored status is no longer
        `expected`.

        Returns:
            The post-write request, or None if the stored status did not match
        """
        credit_ids = list(credit_user_ids)
        try:
            affected = (
                self.db.query(SwapRequestDB)
                .filter(
                    SwapRequestDB.id == request_id,
                    SwapRequestDB.status == enum_to_value(expected),
                )
                .update(
                    {SwapRequestDB.status: enum_to_value(new), SwapRequestDB.updated_at: updated_at},
                    synchronize_session=False,
                )
            )
            if affected == 0:
                self.db.rollback()
                logger.debug(f"Swap request {request_id} is no longer {enum_to_value(expected)}")
                return None

            if credit_ids:
                self.db.query(UserDB).filter(UserDB.id.in_(credit_ids)).update(
                    {UserDB.total_swaps: UserDB.total_swaps + 1},
                    synchronize_session=False,
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to transition swap request {request_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to transition swap request {request_id}") from e

        logger.debug(f"Swap request {request_id}: {enum_to_value(expected)} -> {enum_to_value(new)}")
        return self.get(request_id)

    def delete(self, request_id: str, expected: Optional[SwapStatus] = None) -> bool:
        """Permanently delete a request, optionally only while it has the `expected` status."""
        conditions = [SwapRequestDB.id == request_id]
        if expected is not None:
            conditions.append(SwapRequestDB.status == enum_to_value(expected))
        try:
            affected = self.db.query(SwapRequestDB).filter(*conditions).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete swap request {request_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to delete swap request {request_id}") from e
        if affected:
            logger.debug(f"Deleted swap request {request_id}")
        return bool(affected)
