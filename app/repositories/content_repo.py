# app/repositories/content_repo.py
from sqlmodel import Session, select

from app.models.content import ContentEntry
from app.models.user import utcnow


class ContentRepository:

    def get_by_id(self, session: Session, entry_id: int) -> ContentEntry | None:
        return session.get(ContentEntry, entry_id)

    def list_for_user(
        self,
        session: Session,
        user_id: str,
        category: str | None = None,
    ) -> list[ContentEntry]:
        """
        Entries owned by `user_id`, newest first.
        The category filter is only added when one is given.
        """
        conditions = [ContentEntry.user_id == user_id]
        if category:
            conditions.append(ContentEntry.category == category)

        stmt = (
            select(ContentEntry)
            .where(*conditions)
            .order_by(ContentEntry.created_at.desc(), ContentEntry.id.desc())
        )
        return list(session.exec(stmt).all())

    def list_all(
        self, session: Session, skip: int = 0, limit: int = 100
    ) -> list[ContentEntry]:
        """All entries across users (admin listing)."""
        stmt = (
            select(ContentEntry)
            .order_by(ContentEntry.created_at.desc(), ContentEntry.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    # CRUD
    def create(self, session: Session, entry: ContentEntry) -> ContentEntry:
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    def update(self, session: Session, entry: ContentEntry) -> ContentEntry:
        entry.updated_at = utcnow()
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    def delete(self, session: Session, entry: ContentEntry) -> None:
        session.delete(entry)
        session.commit()
