# app/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    Persistent user profile for House of Truth.

    Identity:
      - id: MUST match the Supabase auth user id (JWT "sub"), kept as string

    Role:
      - "user" | "admin"; only the admin role endpoint changes it.

    Billing:
      - stripe_customer_id / stripe_subscription_id are set when a
        subscription is initiated.
      - subscription_status moves to "premium" only from the Stripe
        webhook (payment succeeded), never from initiation itself.

    This table is *not* responsible for password hashes. Supabase Auth
    stores the password in its own schema.
    """

    __tablename__ = "users"

    id: str = Field(
        primary_key=True,
        max_length=64,
        description="Matches Supabase auth.users.id",
    )

    email: str | None = Field(
        default=None,
        unique=True,
        index=True,
        description="Email from Supabase auth.users",
    )

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    profile_image_url: str | None = None

    stripe_customer_id: str | None = Field(default=None, index=True)
    stripe_subscription_id: str | None = Field(default=None, index=True)

    subscription_status: str = Field(
        default="free",
        description="Subscription tier: free | premium",
    )

    # Application role (not Supabase RLS role)
    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    theme: str = Field(
        default="dark-academia",
        description="UI theme preference",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last update timestamp (UTC)",
    )
