# app/services/stats_service.py
from sqlmodel import Session

from app.models.user import User
from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import (
    SubscriptionCount,
    SystemStats,
    UserStatsRead,
    UserStatsUpdate,
)


class StatsService:
    """
    Per-user dashboard counters and the admin-wide aggregates.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_user_stats(self, session: Session, user: User) -> UserStatsRead:
        """Counters for `user`; all zeros when no row exists yet."""
        stats = self.repo.get_for_user(session, user.id)
        if stats is None:
            return UserStatsRead()
        return UserStatsRead.model_validate(stats)

    def update_user_stats(
        self, session: Session, user: User, payload: UserStatsUpdate
    ) -> UserStatsRead:
        values = payload.model_dump(exclude_none=True)
        stats = self.repo.upsert(session, user.id, values)
        return UserStatsRead.model_validate(stats)

    def get_system_stats(self, session: Session) -> SystemStats:
        breakdown = [
            SubscriptionCount(status=status or "free", count=int(count or 0))
            for status, count in self.repo.subscription_breakdown(session)
        ]

        return SystemStats(
            total_users=self.repo.count_users(session),
            total_content=self.repo.count_content(session),
            total_reminders=self.repo.count_reminders(session),
            total_activities=self.repo.count_activities(session),
            subscription_breakdown=breakdown,
        )
