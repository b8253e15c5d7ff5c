# app/schemas/stats.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class UserStatsRead(SQLModel):
    """
    Dashboard counters for the current user.
    All zeros when the user has no stats row yet.
    """

    total_entries: int = 0
    hours_studied: int = 0
    active_rituals: int = 0
    connections: int = 0
    updated_at: datetime | None = None


class UserStatsUpdate(SQLModel):
    """
    Overwrite one or more counters.
    """

    model_config = ConfigDict(extra="forbid")

    total_entries: int | None = Field(default=None, ge=0)
    hours_studied: int | None = Field(default=None, ge=0)
    active_rituals: int | None = Field(default=None, ge=0)
    connections: int | None = Field(default=None, ge=0)


class SubscriptionCount(SQLModel):
    status: str
    count: int


class SystemStats(SQLModel):
    """
    Full payload for the admin dashboard.
    """

    model_config = ConfigDict(extra="forbid")

    total_users: int
    total_content: int
    total_reminders: int
    total_activities: int
    subscription_breakdown: list[SubscriptionCount]
