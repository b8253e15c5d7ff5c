# app/repositories/activity_repo.py
from sqlmodel import Session, select

from app.models.activity import ActivityLog


class ActivityRepository:
    """
    Append-only access to the activity feed.
    """

    def list_for_user(
        self, session: Session, user_id: str, limit: int = 10
    ) -> list[ActivityLog]:
        stmt = (
            select(ActivityLog)
            .where(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_all(
        self, session: Session, skip: int = 0, limit: int = 100
    ) -> list[ActivityLog]:
        stmt = (
            select(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, activity: ActivityLog) -> ActivityLog:
        session.add(activity)
        session.commit()
        session.refresh(activity)
        return activity
