"""Static skill taxonomy for SkillSwap.

Categories group skill names for the browse filters only; they play no part in
swap validation.
"""

from typing import Dict, Iterable, List, Optional
from pydantic import BaseModel, Field


class SkillCategory(BaseModel):
    """A named group of skill names."""

    id: str = Field(..., description="Stable category identifier")
    name: str = Field(..., description="Display name")
    skills: List[str] = Field(default_factory=list, description="Skill names in this category")


DEFAULT_CATEGORIES: List[SkillCategory] = [
    SkillCategory(
        id="technology",
        name="Technology",
        skills=["JavaScript", "Python", "React", "Node.js", "Data Analysis", "Machine Learning", "SQL", "Web Development"],
    ),
    SkillCategory(
        id="design",
        name="Design",
        skills=["Photoshop", "Illustrator", "UI Design", "UX Design", "Figma", "Graphic Design", "Design"],
    ),
    SkillCategory(
        id="languages",
        name="Languages",
        skills=["Spanish", "French", "German", "Japanese", "Mandarin", "English"],
    ),
    SkillCategory(
        id="music",
        name="Music",
        skills=["Guitar", "Piano", "Singing", "Drums", "Music Production"],
    ),
    SkillCategory(
        id="business",
        name="Business",
        skills=["Marketing", "Public Speaking", "Project Management", "Excel", "Writing"],
    ),
    SkillCategory(
        id="lifestyle",
        name="Lifestyle",
        skills=["Cooking", "Yoga", "Photography", "Gardening", "Fitness"],
    ),
]


class SkillTaxonomy:
    """Lookup from category id to its skill names."""

    def __init__(self, categories: Iterable[SkillCategory] = DEFAULT_CATEGORIES):
        self._categories: Dict[str, SkillCategory] = {category.id: category for category in categories}

    def categories(self) -> List[SkillCategory]:
        return list(self._categories.values())

    def skills_for(self, category_id: Optional[str]) -> Optional[List[str]]:
        """Skill names for a category, or None if the category is unknown."""
        category = self._categories.get(category_id) if category_id else None
        return list(category.skills) if category else None


default_taxonomy = SkillTaxonomy()
