# app/services/reminder_service.py
from sqlmodel import Session

from app.core.ownership import require_owned
from app.models.reminder import Reminder
from app.models.user import User
from app.repositories.reminder_repo import ReminderRepository
from app.schemas.reminder import ReminderCreate, ReminderUpdate


class ReminderService:
    """
    Business logic for reminders.

    Reminder types are labels; nothing here schedules follow-up
    occurrences.
    """

    def __init__(self, repo: ReminderRepository):
        self.repo = repo

    def _get_owned(self, session: Session, user: User, reminder_id: int) -> Reminder:
        reminder = self.repo.get_by_id(session, reminder_id)
        return require_owned(reminder, user, "Reminder")

    def list_reminders(self, session: Session, user: User) -> list[Reminder]:
        return self.repo.list_for_user(session, user.id)

    def create_reminder(
        self, session: Session, user: User, payload: ReminderCreate
    ) -> Reminder:
        reminder = Reminder(user_id=user.id, **payload.model_dump())
        return self.repo.create(session, reminder)

    def update_reminder(
        self,
        session: Session,
        user: User,
        reminder_id: int,
        payload: ReminderUpdate,
    ) -> Reminder:
        """
        Partial update; toggling completion sends only `is_completed`.
        Required columns are never cleared by an explicit null.
        """
        reminder = self._get_owned(session, user, reminder_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            setattr(reminder, field, value)

        return self.repo.update(session, reminder)

    def delete_reminder(self, session: Session, user: User, reminder_id: int) -> None:
        reminder = self._get_owned(session, user, reminder_id)
        self.repo.delete(session, reminder)

    def list_all(self, session: Session, skip: int, limit: int) -> list[Reminder]:
        """All reminders across users (admin only)."""
        return self.repo.list_all(session, skip=skip, limit=limit)
