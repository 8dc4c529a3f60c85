"""Swap request lifecycle for SkillSwap.

States and the only legal moves:

    pending  -> accepted | rejected   (recipient)
    pending  -> cancelled             (requester)
    accepted -> completed             (either party)

rejected, cancelled and completed are terminal. Every transition is written as a
conditional update on the expected source status, so a repeated or racing call
fails with InvalidStateError instead of applying twice.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from skillswap.errors import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from skillswap.models.constants import MAX_MESSAGE_LENGTH
from skillswap.models.swap_request import SwapRequest, SwapStatus
from skillswap.models.user import User

logger = logging.getLogger(__name__)


def validate_new_request(
    from_user: User,
    to_user: User,
    skill_offered: str,
    skill_wanted: str,
    message: str,
) -> None:
    """Raise ValidationError naming the first unmet precondition for a new request."""
    if from_user.id == to_user.id:
        raise ValidationError("Cannot send a swap request to yourself")
    if from_user.is_banned:
        raise ValidationError("Banned users cannot send swap requests")
    if to_user.is_banned:
        raise ValidationError("Cannot send a swap request to a banned user")
    if not to_user.is_public:
        raise ValidationError("Cannot send a swap request to a private profile")
    if skill_offered not in from_user.skills_offered:
        raise ValidationError(f"'{skill_offered}' is not one of your offered skills")
    if skill_wanted not in to_user.skills_offered:
        raise ValidationError(f"'{skill_wanted}' is not offered by {to_user.name}")
    text = (message or "").strip()
    if not text:
        raise ValidationError("Message is required")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValidationError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")


def _newest_first(requests: List[SwapRequest]) -> List[SwapRequest]:
    return sorted(requests, key=lambda r: r.created_at, reverse=True)


class SwapRequestService:
    """Creates swap requests and moves them through their lifecycle."""

    def __init__(self, user_repository, swap_request_repository, clock: Callable[[], datetime] = datetime.utcnow):
        self.users = user_repository
        self.requests = swap_request_repository
        self.clock = clock

    def _get_user(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _get_request(self, request_id: str) -> SwapRequest:
        request = self.requests.get(request_id)
        if request is None:
            raise NotFoundError(f"Swap request {request_id} not found")
        return request

    def get(self, request_id: str, acting_user_id: Optional[str] = None) -> SwapRequest:
        """Get a request; when an actor is given they must be one of its parties."""
        request = self._get_request(request_id)
        if acting_user_id is not None and not request.involves(acting_user_id):
            raise AuthorizationError("Only the two parties can view this swap request")
        return request

    def create(
        self,
        from_user_id: str,
        to_user_id: str,
        skill_offered: str,
        skill_wanted: str,
        message: str,
    ) -> SwapRequest:
        """Create a pending swap request from `from_user_id` to `to_user_id`.

        Raises:
            NotFoundError: If either user does not exist
            ValidationError: For the first unmet precondition
        """
        from_user = self._get_user(from_user_id)
        to_user = self._get_user(to_user_id)
        validate_new_request(from_user, to_user, skill_offered, skill_wanted, message)

        now = self.clock()
        request = SwapRequest(
            id=str(uuid.uuid4()),
            from_user_id=from_user.id,
            to_user_id=to_user.id,
            skill_offered=skill_offered,
            skill_wanted=skill_wanted,
            message=message.strip(),
            status=SwapStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        created = self.requests.create(request)
        logger.info(f"Swap request {created.id} created: {from_user_id} -> {to_user_id}")
        return created

    def _transition(
        self,
        request: SwapRequest,
        expected: SwapStatus,
        new: SwapStatus,
        credit_user_ids: tuple = (),
    ) -> SwapRequest:
        if request.status != expected:
            raise InvalidStateError(
                f"Swap request {request.id} is {request.status}; expected {expected.value}"
            )
        updated = self.requests.transition_status(
            request.id, expected, new, self.clock(), credit_user_ids=credit_user_ids
        )
        if updated is None:
            # Another writer moved the request after we read it.
            raise InvalidStateError(f"Swap request {request.id} is no longer {expected.value}")
        logger.info(f"Swap request {request.id}: {expected.value} -> {new.value}")
        return updated

    def accept(self, request_id: str, acting_user_id: str) -> SwapRequest:
        """Recipient accepts a pending request."""
        request = self._get_request(request_id)
        if acting_user_id != request.to_user_id:
            raise AuthorizationError("Only the recipient can accept this swap request")
        return self._transition(request, SwapStatus.PENDING, SwapStatus.ACCEPTED)

    def reject(self, request_id: str, acting_user_id: str) -> SwapRequest:
        """Recipient rejects a pending request."""
        request = self._get_request(request_id)
        if acting_user_id != request.to_user_id:
            raise AuthorizationError("Only the recipient can reject this swap request")
        return self._transition(request, SwapStatus.PENDING, SwapStatus.REJECTED)

    def cancel(self, request_id: str, acting_user_id: str) -> SwapRequest:
        """Requester withdraws a pending request."""
        request = self._get_request(request_id)
        if acting_user_id != request.from_user_id:
            raise AuthorizationError("Only the requester can cancel this swap request")
        return self._transition(request, SwapStatus.PENDING, SwapStatus.CANCELLED)

    def complete(self, request_id: str, acting_user_id: str) -> SwapRequest:
        """Either party marks an accepted swap as done; both users gain one completed swap."""
        request = self._get_request(request_id)
        if not request.involves(acting_user_id):
            raise AuthorizationError("Only the two parties can complete this swap")
        return self._transition(
            request,
            SwapStatus.ACCEPTED,
            SwapStatus.COMPLETED,
            credit_user_ids=(request.from_user_id, request.to_user_id),
        )

    def delete(self, request_id: str, acting_user_id: str) -> None:
        """Requester removes their own outgoing request while it is still pending."""
        request = self._get_request(request_id)
        if acting_user_id != request.from_user_id:
            raise AuthorizationError("Only the requester can delete this swap request")
        if request.status != SwapStatus.PENDING:
            raise InvalidStateError(f"Swap request {request.id} is {request.status}; only pending requests can be deleted")
        if not self.requests.delete(request.id, expected=SwapStatus.PENDING):
            raise InvalidStateError(f"Swap request {request.id} is no longer pending")
        logger.info(f"Swap request {request.id} deleted by {acting_user_id}")

    def list_for_user(self, user_id: str) -> List[SwapRequest]:
        """Every request the user sent or received, newest first."""
        return _newest_first(self.requests.list_by_user(user_id))

    def received(self, user_id: str) -> List[SwapRequest]:
        """Pending requests waiting on this user's answer."""
        return [
            r for r in self.list_for_user(user_id)
            if r.to_user_id == user_id and r.status == SwapStatus.PENDING
        ]

    def sent(self, user_id: str) -> List[SwapRequest]:
        """Pending requests this user is waiting on."""
        return [
            r for r in self.list_for_user(user_id)
            if r.from_user_id == user_id and r.status == SwapStatus.PENDING
        ]

    def history(self, user_id: str) -> List[SwapRequest]:
        """Accepted and completed swaps involving this user."""
        return [
            r for r in self.list_for_user(user_id)
            if r.status in (SwapStatus.ACCEPTED, SwapStatus.COMPLETED)
        ]
