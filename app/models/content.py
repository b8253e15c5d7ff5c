# app/models/content.py
from datetime import datetime

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from app.models.user import utcnow


class ContentEntry(SQLModel, table=True):
    """
    A journal entry filed under one category.

    `category` is a plain string column; the allowed values
    (literature | rituals | aesthetics | music) are enforced by the
    input schemas only.
    """

    __tablename__ = "content_entries"

    id: int | None = Field(default=None, primary_key=True)

    user_id: str = Field(
        foreign_key="users.id",
        index=True,
    )

    title: str = Field(min_length=1)
    content: str | None = None

    category: str = Field(index=True, max_length=50)

    # Ordered list of tags, stored as JSON
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )

    image_url: str | None = None

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
