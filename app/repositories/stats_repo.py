# app/repositories/stats_repo.py
from sqlalchemy import case, func
from sqlmodel import Session, select

from app.database import dialect_insert
from app.models.activity import ActivityLog
from app.models.content import ContentEntry
from app.models.reminder import Reminder
from app.models.stats import UserStats
from app.models.user import User

COUNTER_FIELDS = ("total_entries", "hours_studied", "active_rituals", "connections")


class StatsRepository:
    """
    Per-user counters plus read-only aggregates for the admin dashboard.

    Counter writes are single INSERT ... ON CONFLICT (user_id) statements,
    so concurrent updates for one user never race on "row exists?".
    """

    # ----- Per-user counters -----

    def get_for_user(self, session: Session, user_id: str) -> UserStats | None:
        stmt = select(UserStats).where(UserStats.user_id == user_id)
        return session.exec(stmt).first()

    @staticmethod
    def _check_fields(fields) -> None:
        unknown = set(fields) - set(COUNTER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown stats fields: {sorted(unknown)}")

    def upsert(self, session: Session, user_id: str, values: dict[str, int]) -> UserStats:
        """
        Overwrite the given counters, creating the row if needed.
        """
        self._check_fields(values)

        row = UserStats(user_id=user_id, **values).model_dump(exclude={"id"})
        stmt = dialect_insert(session, UserStats).values(**row)
        set_ = {key: stmt.excluded[key] for key in values}
        set_["updated_at"] = stmt.excluded.updated_at
        stmt = stmt.on_conflict_do_update(index_elements=["user_id"], set_=set_)

        session.exec(stmt)
        session.commit()
        return self.get_for_user(session, user_id)

    def increment(self, session: Session, user_id: str, **deltas: int) -> UserStats:
        """
        Add deltas to counters atomically; results are floored at zero.

        Example:
            repo.increment(session, user_id, total_entries=1)
        """
        self._check_fields(deltas)

        initial = {key: max(delta, 0) for key, delta in deltas.items()}
        row = UserStats(user_id=user_id, **initial).model_dump(exclude={"id"})
        stmt = dialect_insert(session, UserStats).values(**row)

        table = UserStats.__table__
        set_ = {}
        for key, delta in deltas.items():
            current = table.c[key]
            set_[key] = case((current + delta < 0, 0), else_=current + delta)
        set_["updated_at"] = stmt.excluded.updated_at
        stmt = stmt.on_conflict_do_update(index_elements=["user_id"], set_=set_)

        session.exec(stmt)
        session.commit()
        return self.get_for_user(session, user_id)

    # ----- System-wide aggregates -----

    def _count(self, session: Session, model) -> int:
        stmt = select(func.count()).select_from(model)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_users(self, session: Session) -> int:
        return self._count(session, User)

    def count_content(self, session: Session) -> int:
        return self._count(session, ContentEntry)

    def count_reminders(self, session: Session) -> int:
        return self._count(session, Reminder)

    def count_activities(self, session: Session) -> int:
        return self._count(session, ActivityLog)

    def subscription_breakdown(self, session: Session) -> list[tuple]:
        """
        Number of users per subscription status.
        """
        stmt = (
            select(User.subscription_status, func.count(User.id))
            .group_by(User.subscription_status)
            .order_by(User.subscription_status)
        )
        return list(session.exec(stmt).all())
