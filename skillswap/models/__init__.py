"""Data models for SkillSwap."""

from skillswap.models.user import User, Availability
from skillswap.models.swap_request import SwapRequest, SwapStatus, TERMINAL_STATUSES
from skillswap.models.admin_message import AdminMessage, AdminMessageType
from skillswap.models.content_report import ContentReport, ContentType, ReviewStatus

__all__ = [
    "User",
    "Availability",
    "SwapRequest",
    "SwapStatus",
    "TERMINAL_STATUSES",
    "AdminMessage",
    "AdminMessageType",
    "ContentReport",
    "ContentType",
    "ReviewStatus",
]
