# app/schemas/content.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Category = Literal["literature", "rituals", "aesthetics", "music"]
CATEGORIES: tuple[str, ...] = ("literature", "rituals", "aesthetics", "music")


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    """Strip tags and drop blanks, keeping the caller's order."""
    if tags is None:
        return None
    cleaned = []
    for tag in tags:
        tag = tag.strip()
        if tag:
            cleaned.append(tag)
    return cleaned


class ContentEntryCreate(SQLModel):
    """
    Payload for creating a content entry.

    `user_id` is intentionally absent: the owner is always the
    authenticated user, and extra fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    content: str | None = None
    category: Category
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class ContentEntryUpdate(SQLModel):
    """
    Partial update; only provided fields are applied.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    category: Category | None = None
    tags: list[str] | None = None
    image_url: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)


class ContentEntryRead(SQLModel):
    id: int
    user_id: str
    title: str
    content: str | None
    category: str
    tags: list[str]
    image_url: str | None
    created_at: datetime
    updated_at: datetime
