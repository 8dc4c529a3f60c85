"""User data model for SkillSwap."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class Availability(str, Enum):
    """Availability slot enumeration."""
    MORNINGS = "Mornings"
    AFTERNOONS = "Afternoons"
    EVENINGS = "Evenings"
    WEEKDAYS = "Weekdays"
    WEEKENDS = "Weekends"


def unique_in_order(values: List) -> List:
    """Deduplicate while preserving first-seen order."""
    seen = set()
    out = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


class User(BaseModel):
    """User profile with the skills they offer and want."""

    id: str = Field(..., description="Unique user identifier")
    name: str = Field(..., description="User display name")
    email: Optional[str] = Field(None, description="User email address")
    location: Optional[str] = Field(None, description="Free-form location")
    profile_photo: Optional[str] = Field(None, description="Profile photo URL")
    skills_offered: List[str] = Field(default_factory=list, description="Skill names the user can teach")
    skills_wanted: List[str] = Field(default_factory=list, description="Skill names the user wants to learn")
    availability: List[Availability] = Field(default_factory=list, description="When the user is available")
    is_public: bool = Field(True, description="Whether the profile shows up in browse results")
    is_banned: bool = Field(False, description="Whether the user has been banned by an admin")
    is_admin: bool = Field(False, description="Whether the user can use admin operations")
    rating: float = Field(0.0, ge=0.0, le=5.0, description="Average rating from completed swaps")
    total_swaps: int = Field(0, ge=0, description="Number of completed swaps")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")

    @field_validator("skills_offered", "skills_wanted", "availability")
    @classmethod
    def _dedupe(cls, v):
        # Skill names are kept exactly as provided (no case folding).
        return unique_in_order(v or [])

    @property
    def all_skills(self) -> List[str]:
        """Offered then wanted skills, each name once."""
        return unique_in_order([*self.skills_offered, *self.skills_wanted])

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
