"""SwapRequest data model for SkillSwap."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field


class SwapStatus(str, Enum):
    """Swap request lifecycle states."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = (SwapStatus.REJECTED, SwapStatus.COMPLETED, SwapStatus.CANCELLED)


class SwapRequest(BaseModel):
    """A request from one user to trade one of their skills for one of another user's."""

    id: str = Field(..., description="Unique swap request identifier (UUID v4)")
    from_user_id: str = Field(..., description="Requesting user")
    to_user_id: str = Field(..., description="User receiving the request")
    skill_offered: str = Field(..., description="Skill the requester teaches (from their offered skills)")
    skill_wanted: str = Field(..., description="Skill the requester wants (from the recipient's offered skills)")
    message: str = Field(..., description="Note to the recipient")
    status: SwapStatus = Field(SwapStatus.PENDING, description="Lifecycle status")
    created_at: datetime = Field(..., description="Request creation timestamp")
    updated_at: datetime = Field(..., description="Last status change timestamp")

    def involves(self, user_id: str) -> bool:
        return user_id in (self.from_user_id, self.to_user_id)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
