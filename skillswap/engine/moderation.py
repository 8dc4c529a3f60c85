"""Admin moderation for SkillSwap: bans, broadcast messages and content review."""

import logging
import uuid
from datetime import datetime
from typing import Callable, List

from skillswap.errors import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from skillswap.models.admin_message import AdminMessage, AdminMessageType
from skillswap.models.content_report import ContentReport, ContentType, ReviewStatus
from skillswap.models.user import User

logger = logging.getLogger(__name__)


def require_admin(user: User) -> None:
    """Raise AuthorizationError unless the user is an admin who is not banned."""
    if not user.is_admin or user.is_banned:
        raise AuthorizationError("Admin access required")


class AdminService:
    """Admin operations.

    Ban and unban only flip the user's flag. Existing swap requests involving the
    user are left as they are; new requests to or from a banned user are refused
    by the swap lifecycle.
    """

    def __init__(
        self,
        user_repository,
        admin_message_repository,
        content_report_repository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.users = user_repository
        self.messages = admin_message_repository
        self.reports = content_report_repository
        self.clock = clock

    def _set_banned(self, admin: User, user_id: str, banned: bool) -> User:
        require_admin(admin)
        if self.users.get(user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        if banned and user_id == admin.id:
            raise ValidationError("Admins cannot ban themselves")
        updated = self.users.set_banned(user_id, banned)
        logger.info(f"Admin {admin.id} {'banned' if banned else 'unbanned'} user {user_id}")
        return updated

    def ban_user(self, admin: User, user_id: str) -> User:
        return self._set_banned(admin, user_id, True)

    def unban_user(self, admin: User, user_id: str) -> User:
        return self._set_banned(admin, user_id, False)

    def send_message(
        self,
        admin: User,
        title: str,
        content: str,
        message_type: AdminMessageType = AdminMessageType.INFO,
    ) -> AdminMessage:
        """Post a platform-wide message."""
        require_admin(admin)
        title = (title or "").strip()
        content = (content or "").strip()
        if not title or not content:
            raise ValidationError("Message title and content are required")

        message = AdminMessage(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            type=message_type,
            is_active=True,
            created_at=self.clock(),
        )
        created = self.messages.create(message)
        logger.info(f"Admin {admin.id} posted message {created.id}")
        return created

    def delete_message(self, admin: User, message_id: str) -> None:
        require_admin(admin)
        if not self.messages.delete(message_id):
            raise NotFoundError(f"Admin message {message_id} not found")
        logger.info(f"Admin {admin.id} deleted message {message_id}")

    def list_messages(self, active_only: bool = True) -> List[AdminMessage]:
        return self.messages.list(active_only=active_only)

    def report_content(
        self,
        reporter_id: str,
        user_id: str,
        content_type: ContentType,
        content: str,
    ) -> ContentReport:
        """File a moderation report against another user's content."""
        if self.users.get(user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        if reporter_id == user_id:
            raise ValidationError("Cannot report your own content")
        content = (content or "").strip()
        if not content:
            raise ValidationError("Reported content is required")

        report = ContentReport(
            id=str(uuid.uuid4()),
            content_type=content_type,
            content=content,
            user_id=user_id,
            reported_by=reporter_id,
            status=ReviewStatus.PENDING,
            created_at=self.clock(),
        )
        return self.reports.create(report)

    def pending_content(self, admin: User) -> List[ContentReport]:
        require_admin(admin)
        return self.reports.list_by_status(ReviewStatus.PENDING)

    def _review(self, admin: User, report_id: str, status: ReviewStatus) -> ContentReport:
        require_admin(admin)
        if self.reports.get(report_id) is None:
            raise NotFoundError(f"Content report {report_id} not found")
        reviewed = self.reports.review(report_id, status, self.clock())
        if reviewed is None:
            raise InvalidStateError(f"Content report {report_id} has already been reviewed")
        logger.info(f"Admin {admin.id} marked content report {report_id} {status.value}")
        return reviewed

    def approve_content(self, admin: User, report_id: str) -> ContentReport:
        return self._review(admin, report_id, ReviewStatus.APPROVED)

    def reject_content(self, admin: User, report_id: str) -> ContentReport:
        return self._review(admin, report_id, ReviewStatus.REJECTED)
