# app/models/activity.py
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.user import utcnow


class ActivityLog(SQLModel, table=True):
    """
    Append-only activity feed row.
    Removed only when the owning user is deleted.
    """

    __tablename__ = "activity_log"

    id: int | None = Field(default=None, primary_key=True)

    user_id: str = Field(
        foreign_key="users.id",
        index=True,
    )

    action: str
    description: str | None = None
    image_url: str | None = None

    created_at: datetime = Field(default_factory=utcnow, index=True)
