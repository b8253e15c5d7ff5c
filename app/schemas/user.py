# app/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

# App-level roles. Anonymous callers have no row at all.
Role = Literal["user", "admin"]
SubscriptionStatus = Literal["free", "premium"]
Theme = Literal["dark-academia", "classical", "modern", "minimalist"]


class UserRead(SQLModel):
    """Response schema returned to clients."""

    model_config = ConfigDict(extra="forbid")

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    stripe_customer_id: str | None
    stripe_subscription_id: str | None
    subscription_status: SubscriptionStatus
    role: Role
    theme: str
    created_at: datetime
    updated_at: datetime


class ThemeUpdate(SQLModel):
    """
    Payload for PUT /theme.
    """

    model_config = ConfigDict(extra="forbid")

    theme: Theme


class ThemeRead(SQLModel):
    theme: str


class UserRoleUpdate(SQLModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role
