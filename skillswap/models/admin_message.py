"""AdminMessage data model for SkillSwap."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field


class AdminMessageType(str, Enum):
    """Broadcast message kind."""
    INFO = "info"
    WARNING = "warning"
    MAINTENANCE = "maintenance"
    FEATURE = "feature"


class AdminMessage(BaseModel):
    """Platform-wide message posted by an admin."""

    id: str = Field(..., description="Unique message identifier")
    title: str = Field(..., description="Message title")
    content: str = Field(..., description="Message body")
    type: AdminMessageType = Field(AdminMessageType.INFO, description="Message kind")
    is_active: bool = Field(True, description="Whether the message is shown to users")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
