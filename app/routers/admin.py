# app/routers/admin.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.models.user import User
from app.repositories.activity_repo import ActivityRepository
from app.repositories.content_repo import ContentRepository
from app.repositories.reminder_repo import ReminderRepository
from app.repositories.stats_repo import StatsRepository
from app.repositories.user_repo import UserRepository
from app.schemas.activity import ActivityRead
from app.schemas.content import ContentEntryRead
from app.schemas.reminder import ReminderRead
from app.schemas.stats import SystemStats
from app.schemas.user import UserRead, UserRoleUpdate
from app.services.activity_service import ActivityService
from app.services.content_service import ContentService
from app.services.reminder_service import ReminderService
from app.services.stats_service import StatsService
from app.services.user_service import UserService

# Every route here requires role == "admin" on the server side.
router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

stats_repo = StatsRepository()
activity_repo = ActivityRepository()

user_service = UserService(UserRepository())
stats_service = StatsService(stats_repo)
content_service = ContentService(ContentRepository(), activity_repo, stats_repo)
reminder_service = ReminderService(ReminderRepository())
activity_service = ActivityService(activity_repo)


@router.get("/stats", response_model=SystemStats)
def get_system_stats(session: Session = Depends(get_session)):
    """
    Totals for users, content, reminders, activity and a
    per-status subscription breakdown.
    """
    return stats_service.get_system_stats(session)


@router.get("/users", response_model=list[UserRead])
def list_users(
    session: Session = Depends(get_session),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
):
    return user_service.list_users(session, skip, limit)


@router.get("/content", response_model=list[ContentEntryRead])
def list_all_content(
    session: Session = Depends(get_session),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    return content_service.list_all(session, skip, limit)


@router.get("/reminders", response_model=list[ReminderRead])
def list_all_reminders(
    session: Session = Depends(get_session),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    return reminder_service.list_all(session, skip, limit)


@router.get("/activities", response_model=list[ActivityRead])
def list_all_activities(
    session: Session = Depends(get_session),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
):
    return activity_service.list_all(session, skip, limit)


@router.put("/users/{user_id}/role", response_model=UserRead)
def change_role(
    user_id: str,
    payload: UserRoleUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    """
    Update a user's role. Allowed roles: user, admin.
    """
    return user_service.update_role(session, user_id, payload, admin)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    """
    Delete a user together with all rows they own.
    """
    user_service.delete_user(session, user_id, admin)
    return None
