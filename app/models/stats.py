# app/models/stats.py
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.user import utcnow


class UserStats(SQLModel, table=True):
    """
    Per-user counters shown on the dashboard.

    One row per user; `user_id` is unique so counters can be written
    with a single INSERT ... ON CONFLICT statement.
    """

    __tablename__ = "user_stats"

    id: int | None = Field(default=None, primary_key=True)

    user_id: str = Field(
        foreign_key="users.id",
        unique=True,
        index=True,
    )

    total_entries: int = Field(default=0, ge=0)
    hours_studied: int = Field(default=0, ge=0)
    active_rituals: int = Field(default=0, ge=0)
    connections: int = Field(default=0, ge=0)

    updated_at: datetime = Field(default_factory=utcnow)
