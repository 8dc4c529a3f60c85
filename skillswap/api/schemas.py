"""Request/response models for the SkillSwap API."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from skillswap.models.admin_message import AdminMessage, AdminMessageType
from skillswap.models.constants import MAX_MESSAGE_LENGTH
from skillswap.models.content_report import ContentReport, ContentType
from skillswap.models.swap_request import SwapRequest
from skillswap.models.user import Availability, User


class UserCreateRequest(BaseModel):
    """Request model for creating a profile."""
    name: str = Field(..., min_length=1, description="Display name")
    email: Optional[str] = Field(None, description="Email address")
    location: Optional[str] = None
    profile_photo: Optional[str] = None
    skills_offered: List[str] = Field(default_factory=list)
    skills_wanted: List[str] = Field(default_factory=list)
    availability: List[Availability] = Field(default_factory=list)
    is_public: bool = True


class UserUpdateRequest(BaseModel):
    """Request model for editing your own profile. Omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    location: Optional[str] = None
    profile_photo: Optional[str] = None
    skills_offered: Optional[List[str]] = None
    skills_wanted: Optional[List[str]] = None
    availability: Optional[List[Availability]] = None
    is_public: Optional[bool] = None


class AuthResponse(BaseModel):
    """Response model for profile creation (carries a bearer token)."""
    access_token: str
    token_type: str = "bearer"
    user: User


class UserResponse(BaseModel):
    user: User


class UserListResponse(BaseModel):
    users: List[User]
    count: int


class BrowseStats(BaseModel):
    count: int
    distinct_skill_count: int
    average_rating: float


class BrowseResponse(BaseModel):
    users: List[User]
    stats: BrowseStats


class CategoryResponse(BaseModel):
    id: str
    name: str
    skills: List[str]


class SwapRequestCreateRequest(BaseModel):
    """Request model for sending a swap request."""
    to_user_id: str
    skill_offered: str
    skill_wanted: str
    # Length limits are enforced by the lifecycle so the error names the rule.
    message: str = Field(..., description=f"Up to {MAX_MESSAGE_LENGTH} characters")


class SwapRequestResponse(BaseModel):
    request: SwapRequest


class SwapRequestListResponse(BaseModel):
    requests: List[SwapRequest]
    count: int


class DashboardResponse(BaseModel):
    total_swaps: int
    active_swaps: int
    pending_requests: int
    rating: float


class PlatformStatsResponse(BaseModel):
    total_users: int
    active_users: int
    banned_users: int
    total_swaps: int
    pending_swaps: int
    active_swaps: int
    completed_swaps: int
    average_rating: float


class SkillCount(BaseModel):
    skill: str
    count: int


class AdminMessageCreateRequest(BaseModel):
    title: str
    content: str
    type: AdminMessageType = AdminMessageType.INFO


class AdminMessageListResponse(BaseModel):
    messages: List[AdminMessage]


class ContentReportCreateRequest(BaseModel):
    user_id: str
    content_type: ContentType
    content: str


class ContentReportListResponse(BaseModel):
    reports: List[ContentReport]


class ReportResponse(BaseModel):
    """A downloadable report: the suggested file name and its JSON payload."""
    filename: str
    data: Any


