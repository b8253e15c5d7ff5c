# app/models/reminder.py
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.user import utcnow


class Reminder(SQLModel, table=True):
    """
    Due-dated reminder.

    `type` (daily | weekly | monthly | custom) is a label only;
    no future occurrences are ever generated from it.
    """

    __tablename__ = "reminders"

    id: int | None = Field(default=None, primary_key=True)

    user_id: str = Field(
        foreign_key="users.id",
        index=True,
    )

    title: str
    description: str | None = None

    due_date: datetime = Field(index=True)
    is_completed: bool = Field(default=False)

    type: str = Field(max_length=20)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
