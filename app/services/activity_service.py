# app/services/activity_service.py
from sqlmodel import Session

from app.models.activity import ActivityLog
from app.models.user import User
from app.repositories.activity_repo import ActivityRepository


class ActivityService:

    def __init__(self, repo: ActivityRepository):
        self.repo = repo

    def recent_for_user(
        self, session: Session, user: User, limit: int = 10
    ) -> list[ActivityLog]:
        """The user's `limit` most recent activity rows, newest first."""
        return self.repo.list_for_user(session, user.id, limit=limit)

    def list_all(self, session: Session, skip: int, limit: int) -> list[ActivityLog]:
        return self.repo.list_all(session, skip=skip, limit=limit)
