# app/schemas/reminder.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

ReminderType = Literal["daily", "weekly", "monthly", "custom"]


class ReminderCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    description: str | None = None
    due_date: datetime
    is_completed: bool = False
    type: ReminderType = "custom"

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v


class ReminderUpdate(SQLModel):
    """
    Partial update. Toggling completion sends only `is_completed`.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool | None = None
    type: ReminderType | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v


class ReminderRead(SQLModel):
    id: int
    user_id: str
    title: str
    description: str | None
    due_date: datetime
    is_completed: bool
    type: str
    created_at: datetime
    updated_at: datetime
