# app/routers/stats.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.activity_repo import ActivityRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.activity import ActivityRead
from app.schemas.stats import UserStatsRead, UserStatsUpdate
from app.services.activity_service import ActivityService
from app.services.stats_service import StatsService

router = APIRouter(tags=["Stats"])

stats_service = StatsService(StatsRepository())
activity_service = ActivityService(ActivityRepository())


@router.get("/stats", response_model=UserStatsRead)
def get_my_stats(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Dashboard counters for the current user (zeros if none recorded).
    """
    return stats_service.get_user_stats(session, current_user)


@router.put("/stats", response_model=UserStatsRead)
def update_my_stats(
    payload: UserStatsUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Overwrite one or more counters (e.g. hours studied).
    """
    return stats_service.update_user_stats(session, current_user, payload)


@router.get("/activity", response_model=list[ActivityRead])
def get_my_activity(
    limit: int = Query(default=10, ge=1, le=100),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    The current user's most recent activity rows, newest first.
    """
    return activity_service.recent_for_user(session, current_user, limit=limit)
