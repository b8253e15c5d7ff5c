# app/models/integration.py
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import SQLModel, Field

from app.models.user import utcnow


class Integration(SQLModel, table=True):
    """
    Third-party integration toggle for a user.
    One user cannot have 2 rows for the same platform.
    """

    __tablename__ = "integrations"
    __table_args__ = (
        UniqueConstraint("user_id", "platform", name="uq_integrations_user_platform"),
    )

    id: int | None = Field(default=None, primary_key=True)

    user_id: str = Field(
        foreign_key="users.id",
        index=True,
    )

    platform: str = Field(max_length=20)
    is_connected: bool = Field(default=False)

    settings: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
    )

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
