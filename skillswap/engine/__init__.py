"""Swap lifecycle, browse filtering and admin reporting for SkillSwap."""

from skillswap.engine.swap_lifecycle import SwapRequestService, validate_new_request
from skillswap.engine.search import BrowseQuery, BrowseService, browse, stats, skills_for_category
from skillswap.engine.reporting import (
    ReportingService,
    platform_stats,
    top_skills,
    dashboard_stats,
    export_users,
    export_swaps,
    export_activity,
    filter_users_for_admin,
    filter_swaps_for_admin,
)
from skillswap.engine.moderation import AdminService, require_admin
from skillswap.engine.taxonomy import SkillCategory, SkillTaxonomy, default_taxonomy

__all__ = [
    "SwapRequestService",
    "validate_new_request",
    "BrowseQuery",
    "BrowseService",
    "browse",
    "stats",
    "skills_for_category",
    "ReportingService",
    "platform_stats",
    "top_skills",
    "dashboard_stats",
    "export_users",
    "export_swaps",
    "export_activity",
    "filter_users_for_admin",
    "filter_swaps_for_admin",
    "AdminService",
    "require_admin",
    "SkillCategory",
    "SkillTaxonomy",
    "default_taxonomy",
]
