# app/repositories/user_repo.py
from typing import Any

from sqlalchemy import delete
from sqlmodel import Session, select

from app.database import dialect_insert
from app.models.activity import ActivityLog
from app.models.content import ContentEntry
from app.models.integration import Integration
from app.models.reminder import Reminder
from app.models.stats import UserStats
from app.models.user import User, utcnow

# Children first, so foreign keys never point at a missing user.
DEPENDENT_MODELS = (ContentEntry, Reminder, UserStats, ActivityLog, Integration)


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: str) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_subscription_id(
        self, session: Session, subscription_id: str
    ) -> User | None:
        """Return the User holding a Stripe subscription id, or None."""
        stmt = select(User).where(User.stripe_subscription_id == subscription_id)
        return session.exec(stmt).first()

    def list(self, session: Session, skip: int = 0, limit: int = 50) -> list[User]:
        """
        Paginated user listing, newest first.

        Args:
            skip: offset rows (for paging)
            limit: max number of rows returned

        Returns:
            List[User]
        """
        stmt = (
            select(User)
            .order_by(User.created_at.desc(), User.id)
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def upsert(self, session: Session, values: dict[str, Any]) -> User:
        """
        Insert a User, or overwrite the supplied fields if the id exists.

        Only keys present in `values` (plus updated_at) are written on
        conflict, so a theme change never resets the role or billing refs.
        """
        row = User(**values).model_dump()
        stmt = dialect_insert(session, User).values(**row)
        set_ = {key: stmt.excluded[key] for key in values if key != "id"}
        set_["updated_at"] = stmt.excluded.updated_at
        stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=set_)

        session.exec(stmt)
        session.commit()
        return session.get(User, values["id"], populate_existing=True)

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        user.updated_at = utcnow()
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete_with_dependents(self, session: Session, user_id: str) -> None:
        """
        Delete a User and every row owned by it in one transaction.

        Order: content entries, reminders, stats, activity, integrations,
        then the user row itself.
        """
        for model in DEPENDENT_MODELS:
            session.exec(delete(model).where(model.user_id == user_id))
        session.exec(delete(User).where(User.id == user_id))
        session.commit()
