# app/repositories/reminder_repo.py
from sqlmodel import Session, select

from app.models.reminder import Reminder
from app.models.user import utcnow


class ReminderRepository:

    def get_by_id(self, session: Session, reminder_id: int) -> Reminder | None:
        return session.get(Reminder, reminder_id)

    def list_for_user(self, session: Session, user_id: str) -> list[Reminder]:
        """Reminders owned by `user_id`, soonest due first."""
        stmt = (
            select(Reminder)
            .where(Reminder.user_id == user_id)
            .order_by(Reminder.due_date, Reminder.id)
        )
        return list(session.exec(stmt).all())

    def list_all(
        self, session: Session, skip: int = 0, limit: int = 100
    ) -> list[Reminder]:
        stmt = (
            select(Reminder)
            .order_by(Reminder.due_date, Reminder.id)
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    # CRUD
    def create(self, session: Session, reminder: Reminder) -> Reminder:
        session.add(reminder)
        session.commit()
        session.refresh(reminder)
        return reminder

    def update(self, session: Session, reminder: Reminder) -> Reminder:
        reminder.updated_at = utcnow()
        session.add(reminder)
        session.commit()
        session.refresh(reminder)
        return reminder

    def delete(self, session: Session, reminder: Reminder) -> None:
        session.delete(reminder)
        session.commit()
