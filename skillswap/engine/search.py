"""Browse search and filtering for SkillSwap.

Filters are applied in memory over the user directory:
1. Base set: everyone except the viewer, banned users and private profiles
2. Free text: case-insensitive substring over name, location, offered and wanted
   skills (a match on any one field is enough)
3. Category: at least one offered or wanted skill belongs to the category
4. Skill: exact skill name among offered or wanted skills

All supplied filters must pass. Result order follows the input order.
"""

import logging
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from skillswap.models.user import User
from skillswap.engine.taxonomy import SkillTaxonomy, default_taxonomy

logger = logging.getLogger(__name__)


class BrowseQuery(BaseModel):
    """Filters selected on the browse page."""

    text: Optional[str] = Field(None, description="Free-text search")
    category_id: Optional[str] = Field(None, description="Skill category filter")
    skill_name: Optional[str] = Field(None, description="Exact skill filter")


def is_browsable(user: User, viewer_id: Optional[str]) -> bool:
    """Whether a user can appear in someone else's browse results."""
    return user.id != viewer_id and user.is_public and not user.is_banned


def matches_text(user: User, text: str) -> bool:
    """Case-insensitive substring match on name, location or any skill."""
    needle = text.lower()
    if needle in user.name.lower():
        return True
    if user.location and needle in user.location.lower():
        return True
    return any(needle in skill.lower() for skill in user.all_skills)


def matches_category(user: User, category_skills: List[str]) -> bool:
    return any(skill in category_skills for skill in user.all_skills)


def matches_skill(user: User, skill_name: str) -> bool:
    return skill_name in user.all_skills


def browse(
    viewer_id: Optional[str],
    query: BrowseQuery,
    users: List[User],
    taxonomy: SkillTaxonomy = default_taxonomy,
) -> List[User]:
    """Return the users visible to `viewer_id` that satisfy every filter in `query`.

    Args:
        viewer_id: The browsing user (never included in the result)
        query: Selected filters; empty or whitespace-only text is ignored
        users: The user directory
        taxonomy: Category lookup; an unknown category filters nothing

    Returns:
        Matching users in directory order
    """
    text = (query.text or "").strip()
    category_skills = taxonomy.skills_for(query.category_id)
    if query.category_id and category_skills is None:
        logger.debug(f"Unknown category {query.category_id!r}; category filter ignored")

    results: List[User] = []
    for user in users:
        if not is_browsable(user, viewer_id):
            continue
        if text and not matches_text(user, text):
            continue
        if category_skills is not None and not matches_category(user, category_skills):
            continue
        if query.skill_name and not matches_skill(user, query.skill_name):
            continue
        results.append(user)
    return results


def stats(users: List[User]) -> Dict[str, object]:
    """Summary numbers for a result set."""
    distinct_skills = set()
    for user in users:
        distinct_skills.update(user.all_skills)
    average_rating = sum(user.rating for user in users) / len(users) if users else 0.0
    return {
        "count": len(users),
        "distinct_skill_count": len(distinct_skills),
        "average_rating": average_rating,
    }


def skills_for_category(category_id: Optional[str], taxonomy: SkillTaxonomy = default_taxonomy) -> List[str]:
    """Skill choices offered once a category is selected (empty otherwise)."""
    return taxonomy.skills_for(category_id) or []


class BrowseService:
    """Browse operations against the user directory."""

    def __init__(self, user_repository, taxonomy: SkillTaxonomy = default_taxonomy):
        self.users = user_repository
        self.taxonomy = taxonomy

    def browse(self, viewer_id: Optional[str], query: BrowseQuery) -> List[User]:
        return browse(viewer_id, query, self.users.list(), self.taxonomy)

    def browse_with_stats(self, viewer_id: Optional[str], query: BrowseQuery) -> Dict[str, object]:
        results = self.browse(viewer_id, query)
        return {"users": results, "stats": stats(results)}
