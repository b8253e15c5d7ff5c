# app/schemas/integration.py
from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

Platform = Literal["discord", "notion", "obsidian"]


class IntegrationUpsert(SQLModel):
    """
    Payload for POST /integrations.
    (user, platform) identifies the row; the rest is overwritten.
    """

    model_config = ConfigDict(extra="forbid")

    platform: Platform
    is_connected: bool = False
    settings: dict[str, Any] | None = None


class IntegrationRead(SQLModel):
    id: int
    user_id: str
    platform: str
    is_connected: bool
    settings: dict[str, Any] | None
    created_at: datetime
    updated_at: datetime
