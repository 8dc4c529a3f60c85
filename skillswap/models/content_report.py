"""ContentReport data model for SkillSwap."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ContentType(str, Enum):
    """Kind of user content that can be reported."""
    SKILL_DESCRIPTION = "skill_description"
    PROFILE_BIO = "profile_bio"


class ReviewStatus(str, Enum):
    """Moderation status of a report."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ContentReport(BaseModel):
    """User content flagged for admin review."""

    id: str = Field(..., description="Unique report identifier")
    content_type: ContentType = Field(..., description="What kind of content was reported")
    content: str = Field(..., description="The reported text")
    user_id: str = Field(..., description="Author of the content")
    reported_by: str = Field(..., description="User who filed the report")
    status: ReviewStatus = Field(ReviewStatus.PENDING, description="Review status")
    created_at: datetime = Field(..., description="Report timestamp")
    reviewed_at: Optional[datetime] = Field(None, description="When an admin reviewed it")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
