"""Admin aggregation and report records for SkillSwap.

Everything here is a pure function of the users and swap requests passed in.
Export functions return plain dicts/lists that serialize to JSON as-is and are
snapshots of the state at call time.
"""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional

from skillswap.models.constants import DEFAULT_TOP_SKILLS
from skillswap.models.swap_request import SwapRequest, SwapStatus
from skillswap.models.user import User


def _count_status(requests: List[SwapRequest], status: SwapStatus) -> int:
    return sum(1 for r in requests if r.status == status)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def platform_stats(users: List[User], requests: List[SwapRequest]) -> Dict[str, object]:
    """Headline numbers for the admin overview.

    User counts and the average rating ignore admin accounts; the average is
    taken over non-banned users and is 0 when there are none.
    """
    members = [u for u in users if not u.is_admin]
    active = [u for u in members if not u.is_banned]
    return {
        "total_users": len(members),
        "active_users": len(active),
        "banned_users": len(members) - len(active),
        "total_swaps": len(requests),
        "pending_swaps": _count_status(requests, SwapStatus.PENDING),
        "active_swaps": _count_status(requests, SwapStatus.ACCEPTED),
        "completed_swaps": _count_status(requests, SwapStatus.COMPLETED),
        "average_rating": sum(u.rating for u in active) / len(active) if active else 0.0,
    }


def top_skills(users: List[User], n: int = DEFAULT_TOP_SKILLS) -> List[Dict[str, object]]:
    """Most common skill names across users' offered and wanted skills.

    Each user counts at most once per skill. Sorted by count descending; equal
    counts keep the order in which the skill names were first seen.
    """
    counts: Counter = Counter()
    for user in users:
        counts.update(user.all_skills)
    # Counter preserves insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{"skill": skill, "count": count} for skill, count in ranked[:max(n, 0)]]


def dashboard_stats(user: User, requests: List[SwapRequest]) -> Dict[str, object]:
    """Per-user counters shown on the dashboard."""
    mine = [r for r in requests if r.involves(user.id)]
    return {
        "total_swaps": _count_status(mine, SwapStatus.COMPLETED),
        "active_swaps": _count_status(mine, SwapStatus.ACCEPTED),
        "pending_requests": _count_status(mine, SwapStatus.PENDING),
        "rating": user.rating,
    }


def filter_users_for_admin(users: List[User], search: str = "", status: str = "all") -> List[User]:
    """Admin user table filter.

    Args:
        users: The user directory
        search: Case-insensitive substring over name, email and skills
        status: "all", "active" (not banned) or "banned"
    """
    needle = (search or "").strip().lower()
    results = []
    for user in users:
        if status == "banned" and not user.is_banned:
            continue
        if status == "active" and user.is_banned:
            continue
        if needle:
            haystack = [user.name, user.email or "", *user.all_skills]
            if not any(needle in value.lower() for value in haystack):
                continue
        results.append(user)
    return results


def filter_swaps_for_admin(
    requests: List[SwapRequest],
    users: List[User],
    search: str = "",
    status: str = "all",
) -> List[SwapRequest]:
    """Admin swap table filter.

    Args:
        requests: Swap requests to filter
        users: Directory used to resolve party names
        search: Case-insensitive substring over party names and skill names
        status: "all" or a SwapStatus value
    """
    names = {u.id: u.name for u in users}
    needle = (search or "").strip().lower()
    results = []
    for request in requests:
        if status != "all" and request.status != status:
            continue
        if needle:
            haystack = [
                names.get(request.from_user_id, ""),
                names.get(request.to_user_id, ""),
                request.skill_offered,
                request.skill_wanted,
            ]
            if not any(needle in value.lower() for value in haystack):
                continue
        results.append(request)
    return results


def export_users(users: List[User]) -> List[Dict[str, object]]:
    """Users report records."""
    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email or "N/A",
            "location": user.location or "Not specified",
            "skillsOffered": ", ".join(user.skills_offered),
            "skillsWanted": ", ".join(user.skills_wanted),
            "availability": list(user.availability),
            "rating": user.rating,
            "totalSwaps": user.total_swaps,
            "joinedDate": _isoformat(user.created_at),
            "isPublic": user.is_public,
            "isBanned": user.is_banned,
            "isAdmin": user.is_admin,
            "lastActive": _isoformat(user.updated_at),
        }
        for user in users
    ]


def export_swaps(requests: List[SwapRequest], users: List[User]) -> List[Dict[str, object]]:
    """Swaps report records; party ids are resolved to names where known."""
    names = {u.id: u.name for u in users}
    return [
        {
            "id": request.id,
            "fromUserId": request.from_user_id,
            "fromUser": names.get(request.from_user_id, "Unknown"),
            "toUserId": request.to_user_id,
            "toUser": names.get(request.to_user_id, "Unknown"),
            "skillOffered": request.skill_offered,
            "skillWanted": request.skill_wanted,
            "status": request.status,
            "message": request.message,
            "createdAt": _isoformat(request.created_at),
            "updatedAt": _isoformat(request.updated_at),
        }
        for request in requests
    ]


def export_activity(
    users: List[User],
    requests: List[SwapRequest],
    generated_at: Optional[datetime] = None,
) -> Dict[str, object]:
    """Activity report: platform stats plus top skills."""
    summary = platform_stats(users, requests)
    return {
        "totalUsers": summary["total_users"],
        "activeUsers": summary["active_users"],
        "bannedUsers": summary["banned_users"],
        "totalSwaps": summary["total_swaps"],
        "pendingSwaps": summary["pending_swaps"],
        "activeSwaps": summary["active_swaps"],
        "completedSwaps": summary["completed_swaps"],
        "averageRating": summary["average_rating"],
        "topSkills": top_skills(users),
        "generatedAt": (generated_at or datetime.utcnow()).isoformat(),
    }


class ReportingService:
    """Reporting operations against the repositories."""

    def __init__(self, user_repository, swap_request_repository):
        self.users = user_repository
        self.requests = swap_request_repository

    def platform_stats(self) -> Dict[str, object]:
        return platform_stats(self.users.list(), self.requests.list_all())

    def top_skills(self, n: int = DEFAULT_TOP_SKILLS) -> List[Dict[str, object]]:
        return top_skills(self.users.list(), n)

    def dashboard(self, user: User) -> Dict[str, object]:
        return dashboard_stats(user, self.requests.list_by_user(user.id))

    def export_users(self) -> List[Dict[str, object]]:
        return export_users(self.users.list())

    def export_swaps(self) -> List[Dict[str, object]]:
        return export_swaps(self.requests.list_all(), self.users.list())

    def export_activity(self, generated_at: Optional[datetime] = None) -> Dict[str, object]:
        return export_activity(self.users.list(), self.requests.list_all(), generated_at)
