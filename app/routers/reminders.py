# app/routers/reminders.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.reminder_repo import ReminderRepository
from app.schemas.reminder import ReminderCreate, ReminderRead, ReminderUpdate
from app.services.reminder_service import ReminderService

router = APIRouter(prefix="/reminders", tags=["Reminders"])

repo = ReminderRepository()
service = ReminderService(repo)


@router.get("", response_model=list[ReminderRead])
def list_my_reminders(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Current user's reminders, soonest due first.
    """
    return service.list_reminders(session, current_user)


@router.post("", response_model=ReminderRead, status_code=status.HTTP_201_CREATED)
def create_reminder(
    payload: ReminderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.create_reminder(session, current_user, payload)


@router.put("/{reminder_id}", response_model=ReminderRead)
def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update a reminder (the completion toggle uses this too).

    403 if the reminder belongs to someone else.
    """
    return service.update_reminder(session, current_user, reminder_id, payload)


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reminder(
    reminder_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    service.delete_reminder(session, current_user, reminder_id)
    return None
