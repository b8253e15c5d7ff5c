# app/schemas/activity.py
from datetime import datetime

from sqlmodel import SQLModel


class ActivityRead(SQLModel):
    id: int
    user_id: str
    action: str
    description: str | None
    image_url: str | None
    created_at: datetime
