"""FastAPI web application for SkillSwap."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional
from fastapi import Depends, FastAPI, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from skillswap.api.schemas import (
    AdminMessageCreateRequest,
    AdminMessageListResponse,
    AuthResponse,
    BrowseResponse,
    CategoryResponse,
    ContentReportCreateRequest,
    ContentReportListResponse,
    DashboardResponse,
    PlatformStatsResponse,
    ReportResponse,
    SkillCount,
    SwapRequestCreateRequest,
    SwapRequestListResponse,
    SwapRequestResponse,
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)
from skillswap.auth.dependencies import get_current_admin, get_current_user
from skillswap.auth.jwt import create_access_token
from skillswap.database.admin_message_repository import AdminMessageRepository
from skillswap.database.content_report_repository import ContentReportRepository
from skillswap.database.database import get_db, init_db
from skillswap.database.swap_request_repository import SwapRequestRepository
from skillswap.database.user_repository import UserRepository
from skillswap.engine.moderation import AdminService
from skillswap.engine.reporting import (
    ReportingService,
    filter_swaps_for_admin,
    filter_users_for_admin,
)
from skillswap.engine.search import BrowseQuery, BrowseService
from skillswap.engine.swap_lifecycle import SwapRequestService
from skillswap.engine.taxonomy import default_taxonomy
from skillswap.errors import (
    AuthorizationError,
    InvalidStateError,
    NotFoundError,
    RepositoryError,
    SkillSwapError,
    ValidationError,
)
from skillswap.models.constants import DEFAULT_TOP_SKILLS
from skillswap.models.user import User

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SkillSwap API",
    description="Trade skills with other people: offer what you know, learn what you want",
    version="0.1.0",
)


@app.on_event("startup")
def on_startup():
    init_db()


_STATUS_FOR_ERROR = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    InvalidStateError: status.HTTP_409_CONFLICT,
    RepositoryError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: SkillSwapError) -> HTTPException:
    """Map a domain error to the HTTP response the client sees."""
    status_code = _STATUS_FOR_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{type(error).__name__}: {str(error)}")
    return HTTPException(status_code=status_code, detail=str(error))


# Service wiring (one set of repositories per request-scoped session)

def get_swap_service(db: Session = Depends(get_db)) -> SwapRequestService:
    return SwapRequestService(UserRepository(db), SwapRequestRepository(db))


def get_browse_service(db: Session = Depends(get_db)) -> BrowseService:
    return BrowseService(UserRepository(db), default_taxonomy)


def get_reporting_service(db: Session = Depends(get_db)) -> ReportingService:
    return ReportingService(UserRepository(db), SwapRequestRepository(db))


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(UserRepository(db), AdminMessageRepository(db), ContentReportRepository(db))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


# Profiles

@app.post("/users", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    """Create a profile and return a bearer token for it."""
    now = datetime.utcnow()
    user = User(
        id=str(uuid.uuid4()),
        name=request.name.strip(),
        email=request.email,
        location=request.location,
        profile_photo=request.profile_photo,
        skills_offered=request.skills_offered,
        skills_wanted=request.skills_wanted,
        availability=request.availability,
        is_public=request.is_public,
        created_at=now,
        updated_at=now,
    )
    repository = UserRepository(db)
    try:
        if request.email and repository.get_by_email(request.email):
            raise HTTPException(status_code=409, detail="Email already registered")
        created = repository.create(user)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return AuthResponse(access_token=create_access_token(created.id), user=created)


@app.get("/users/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return UserResponse(user=current_user)


@app.put("/users/me", response_model=UserResponse)
def update_me(
    request: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Edit your own profile; only the supplied fields change."""
    changes = request.model_dump(exclude_unset=True)
    repository = UserRepository(db)
    try:
        if changes.get("email"):
            owner = repository.get_by_email(changes["email"])
            if owner is not None and owner.id != current_user.id:
                raise HTTPException(status_code=409, detail="Email already registered")
        updated = repository.update(current_user.id, changes)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return UserResponse(user=updated)


@app.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Public profile. Private and banned profiles are only visible to their owner and admins."""
    try:
        user = UserRepository(db).get(user_id)
    except SkillSwapError as e:
        raise to_http_exception(e)
    hidden = user is not None and (not user.is_public or user.is_banned)
    if user is None or (hidden and user.id != current_user.id and not current_user.is_admin):
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return UserResponse(user=user)


# Browse

@app.get("/categories", response_model=List[CategoryResponse])
async def list_categories():
    return [CategoryResponse(**category.model_dump()) for category in default_taxonomy.categories()]


@app.get("/browse", response_model=BrowseResponse)
def browse_users(
    q: Optional[str] = Query(None, description="Search names, locations and skills"),
    category: Optional[str] = Query(None, description="Skill category id"),
    skill: Optional[str] = Query(None, description="Exact skill name"),
    current_user: User = Depends(get_current_user),
    service: BrowseService = Depends(get_browse_service),
):
    query = BrowseQuery(text=q, category_id=category, skill_name=skill)
    try:
        result = service.browse_with_stats(current_user.id, query)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return BrowseResponse(**result)


@app.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    current_user: User = Depends(get_current_user),
    service: ReportingService = Depends(get_reporting_service),
):
    try:
        return DashboardResponse(**service.dashboard(current_user))
    except SkillSwapError as e:
        raise to_http_exception(e)


# Swap requests

@app.post("/swap-requests", response_model=SwapRequestResponse, status_code=status.HTTP_201_CREATED)
def create_swap_request(
    request: SwapRequestCreateRequest,
    current_user: User = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_service),
):
    try:
        created = service.create(
            current_user.id,
            request.to_user_id,
            request.skill_offered,
            request.skill_wanted,
            request.message,
        )
    except SkillSwapError as e:
        raise to_http_exception(e)
    return SwapRequestResponse(request=created)


@app.get("/swap-requests", response_model=SwapRequestListResponse)
def list_swap_requests(
    box: str = Query("all", pattern="^(all|received|sent|history)$"),
    current_user: User = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_service),
):
    """List your swap requests, newest first.

    `box` selects the view: everything, pending received, pending sent, or
    accepted/completed history.
    """
    listers = {
        "all": service.list_for_user,
        "received": service.received,
        "sent": service.sent,
        "history": service.history,
    }
    try:
        requests = listers[box](current_user.id)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return SwapRequestListResponse(requests=requests, count=len(requests))


@app.get("/swap-requests/{request_id}", response_model=SwapRequestResponse)
def get_swap_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_service),
):
    try:
        return SwapRequestResponse(request=service.get(request_id, current_user.id))
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.post("/swap-requests/{request_id}/{action}", response_model=SwapRequestResponse)
def transition_swap_request(
    request_id: str,
    action: str,
    current_user: User = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_service),
):
    """Apply accept, reject, cancel or complete to a swap request."""
    transitions = {
        "accept": service.accept,
        "reject": service.reject,
        "cancel": service.cancel,
        "complete": service.complete,
    }
    if action not in transitions:
        raise HTTPException(status_code=404, detail=f"Unknown action '{action}'")
    try:
        updated = transitions[action](request_id, current_user.id)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return SwapRequestResponse(request=updated)


@app.delete("/swap-requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_swap_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    service: SwapRequestService = Depends(get_swap_service),
):
    try:
        service.delete(request_id, current_user.id)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Broadcast messages and content reports

@app.get("/messages", response_model=AdminMessageListResponse)
def active_messages(
    current_user: User = Depends(get_current_user),
    service: AdminService = Depends(get_admin_service),
):
    try:
        return AdminMessageListResponse(messages=service.list_messages(active_only=True))
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.post("/content-reports", status_code=status.HTTP_201_CREATED)
def report_content(
    request: ContentReportCreateRequest,
    current_user: User = Depends(get_current_user),
    service: AdminService = Depends(get_admin_service),
):
    try:
        report = service.report_content(current_user.id, request.user_id, request.content_type, request.content)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return {"report": report}


# Admin

@app.get("/admin/stats", response_model=PlatformStatsResponse)
def admin_stats(
    admin: User = Depends(get_current_admin),
    service: ReportingService = Depends(get_reporting_service),
):
    try:
        return PlatformStatsResponse(**service.platform_stats())
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.get("/admin/top-skills", response_model=List[SkillCount])
def admin_top_skills(
    n: int = Query(DEFAULT_TOP_SKILLS, ge=1, le=100),
    admin: User = Depends(get_current_admin),
    service: ReportingService = Depends(get_reporting_service),
):
    try:
        return [SkillCount(**entry) for entry in service.top_skills(n)]
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.get("/admin/users", response_model=UserListResponse)
def admin_users(
    search: str = Query(""),
    user_status: str = Query("all", alias="status", pattern="^(all|active|banned)$"),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        users = filter_users_for_admin(UserRepository(db).list(), search, user_status)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return UserListResponse(users=users, count=len(users))


@app.get("/admin/swaps", response_model=SwapRequestListResponse)
def admin_swaps(
    search: str = Query(""),
    swap_status: str = Query("all", alias="status", pattern="^(all|pending|accepted|rejected|completed|cancelled)$"),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        requests = filter_swaps_for_admin(
            SwapRequestRepository(db).list_all(),
            UserRepository(db).list(),
            search,
            swap_status,
        )
    except SkillSwapError as e:
        raise to_http_exception(e)
    return SwapRequestListResponse(requests=requests, count=len(requests))


@app.post("/admin/users/{user_id}/ban", response_model=UserResponse)
def ban_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    try:
        return UserResponse(user=service.ban_user(admin, user_id))
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.post("/admin/users/{user_id}/unban", response_model=UserResponse)
def unban_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    try:
        return UserResponse(user=service.unban_user(admin, user_id))
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.get("/admin/messages", response_model=AdminMessageListResponse)
def admin_messages(
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    try:
        return AdminMessageListResponse(messages=service.list_messages(active_only=False))
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.post("/admin/messages", status_code=status.HTTP_201_CREATED)
def send_admin_message(
    request: AdminMessageCreateRequest,
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    try:
        message = service.send_message(admin, request.title, request.content, request.type)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return {"message": message}


@app.delete("/admin/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_admin_message(
    message_id: str,
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    try:
        service.delete_message(admin, message_id)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/admin/content", response_model=ContentReportListResponse)
def pending_content(
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    try:
        return ContentReportListResponse(reports=service.pending_content(admin))
    except SkillSwapError as e:
        raise to_http_exception(e)


@app.post("/admin/content/{report_id}/{decision}")
def review_content(
    report_id: str,
    decision: str,
    admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    reviewers = {"approve": service.approve_content, "reject": service.reject_content}
    if decision not in reviewers:
        raise HTTPException(status_code=404, detail=f"Unknown decision '{decision}'")
    try:
        report = reviewers[decision](admin, report_id)
    except SkillSwapError as e:
        raise to_http_exception(e)
    return {"report": report}


@app.get("/admin/reports/{kind}", response_model=ReportResponse)
def download_report(
    kind: str,
    admin: User = Depends(get_current_admin),
    service: ReportingService = Depends(get_reporting_service),
):
    """Report payload for `users`, `swaps` or `activity`, with a dated file name."""
    exporters = {
        "users": service.export_users,
        "swaps": service.export_swaps,
        "activity": service.export_activity,
    }
    if kind not in exporters:
        raise HTTPException(status_code=404, detail=f"Unknown report '{kind}'")
    try:
        data = exporters[kind]()
    except SkillSwapError as e:
        raise to_http_exception(e)
    filename = f"{kind}-report-{datetime.utcnow().date().isoformat()}.json"
    logger.info(f"Admin {admin.id} exported {kind} report")
    return ReportResponse(filename=filename, data=data)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
