"""SQLAlchemy database models for SkillSwap.

This is the only place where persisted column names and the canonical pydantic
models meet; everything above the repositories sees pydantic objects.
"""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, JSON, ForeignKey

from typing import Union, TypeVar, Type
from skillswap.database.database import Base
from skillswap.models.swap_request import SwapStatus
from skillswap.models.admin_message import AdminMessageType
from skillswap.models.content_report import ContentType, ReviewStatus

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default."""
    if not value:
        return default
    try:
        return enum_class(value)
    except ValueError:
        return default


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Profile
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, unique=True)
    location = Column(String, nullable=True)
    profile_photo = Column(String, nullable=True)

    # Skills and availability (stored as JSON arrays, order preserved)
    skills_offered = Column(JSON, nullable=False, default=list)
    skills_wanted = Column(JSON, nullable=False, default=list)
    availability = Column(JSON, nullable=False, default=list)

    # Flags
    is_public = Column(Boolean, nullable=False, default=True, index=True)
    is_banned = Column(Boolean, nullable=False, default=False, index=True)
    is_admin = Column(Boolean, nullable=False, default=False)

    # Reputation
    rating = Column(Float, nullable=False, default=0.0)
    total_swaps = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from skillswap.models.user import User
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            location=self.location,
            profile_photo=self.profile_photo,
            skills_offered=self.skills_offered or [],
            skills_wanted=self.skills_wanted or [],
            availability=self.availability or [],
            is_public=self.is_public,
            is_banned=self.is_banned,
            is_admin=self.is_admin,
            rating=self.rating,
            total_swaps=self.total_swaps,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, user):
        """Create database model from Pydantic model."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            location=user.location,
            profile_photo=user.profile_photo,
            skills_offered=list(user.skills_offered),
            skills_wanted=list(user.skills_wanted),
            availability=[enum_to_value(slot) for slot in user.availability],
            is_public=user.is_public,
            is_banned=user.is_banned,
            is_admin=user.is_admin,
            rating=user.rating,
            total_swaps=user.total_swaps,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class SwapRequestDB(Base):
    """Database model for SwapRequest."""

    __tablename__ = "swap_requests"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Parties
    from_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    to_user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # What is being traded
    skill_offered = Column(String, nullable=False)
    skill_wanted = Column(String, nullable=False)
    message = Column(String(500), nullable=False)

    status = Column(String, nullable=False, default=SwapStatus.PENDING.value, index=True)

    # Timestamps (updated_at is set explicitly on every transition)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from skillswap.models.swap_request import SwapRequest
        return SwapRequest(
            id=self.id,
            from_user_id=self.from_user_id,
            to_user_id=self.to_user_id,
            skill_offered=self.skill_offered,
            skill_wanted=self.skill_wanted,
            message=self.message,
            status=value_to_enum(self.status, SwapStatus, SwapStatus.PENDING),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, request):
        """Create database model from Pydantic model."""
        return cls(
            id=request.id,
            from_user_id=request.from_user_id,
            to_user_id=request.to_user_id,
            skill_offered=request.skill_offered,
            skill_wanted=request.skill_wanted,
            message=request.message,
            status=enum_to_value(request.status),
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


class AdminMessageDB(Base):
    """Database model for AdminMessage."""

    __tablename__ = "admin_messages"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    content = Column(String, nullable=False)
    type = Column(String, nullable=False, default=AdminMessageType.INFO.value)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from skillswap.models.admin_message import AdminMessage
        return AdminMessage(
            id=self.id,
            title=self.title,
            content=self.content,
            type=value_to_enum(self.type, AdminMessageType, AdminMessageType.INFO),
            is_active=self.is_active,
            created_at=self.created_at,
        )

    @classmethod
    def from_pydantic(cls, message):
        """Create database model from Pydantic model."""
        return cls(
            id=message.id,
            title=message.title,
            content=message.content,
            type=enum_to_value(message.type),
            is_active=message.is_active,
            created_at=message.created_at,
        )


class ContentReportDB(Base):
    """Database model for ContentReport."""

    __tablename__ = "content_reports"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    content_type = Column(String, nullable=False)
    content = Column(String, nullable=False)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reported_by = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(String, nullable=False, default=ReviewStatus.PENDING.value, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    reviewed_at = Column(DateTime, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from skillswap.models.content_report import ContentReport
        return ContentReport(
            id=self.id,
            content_type=value_to_enum(self.content_type, ContentType, ContentType.PROFILE_BIO),
            content=self.content,
            user_id=self.user_id,
            reported_by=self.reported_by,
            status=value_to_enum(self.status, ReviewStatus, ReviewStatus.PENDING),
            created_at=self.created_at,
            reviewed_at=self.reviewed_at,
        )

    @classmethod
    def from_pydantic(cls, report):
        """Create database model from Pydantic model."""
        return cls(
            id=report.id,
            content_type=enum_to_value(report.content_type),
            content=report.content,
            user_id=report.user_id,
            reported_by=report.reported_by,
            status=enum_to_value(report.status),
            created_at=report.created_at,
            reviewed_at=report.reviewed_at,
        )
