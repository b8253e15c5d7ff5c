# app/repositories/integration_repo.py
from typing import Any

from sqlalchemy import func
from sqlmodel import Session, select

from app.database import dialect_insert
from app.models.integration import Integration


class IntegrationRepository:

    def list_for_user(self, session: Session, user_id: str) -> list[Integration]:
        stmt = (
            select(Integration)
            .where(Integration.user_id == user_id)
            .order_by(Integration.platform)
        )
        return list(session.exec(stmt).all())

    def get(
        self, session: Session, user_id: str, platform: str
    ) -> Integration | None:
        stmt = select(Integration).where(
            Integration.user_id == user_id, Integration.platform == platform
        )
        return session.exec(stmt).first()

    def count_connected(self, session: Session, user_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Integration)
            .where(Integration.user_id == user_id, Integration.is_connected.is_(True))
        )
        return int(session.exec(stmt).one() or 0)

    def upsert(
        self,
        session: Session,
        *,
        user_id: str,
        platform: str,
        is_connected: bool,
        settings: dict[str, Any] | None,
    ) -> Integration:
        """
        Insert an integration, or on (user_id, platform) conflict overwrite
        is_connected, settings and updated_at.
        """
        row = Integration(
            user_id=user_id,
            platform=platform,
            is_connected=is_connected,
            settings=settings,
        ).model_dump(exclude={"id"})

        stmt = dialect_insert(session, Integration).values(**row)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "platform"],
            set_={
                "is_connected": stmt.excluded.is_connected,
                "settings": stmt.excluded.settings,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        session.exec(stmt)
        session.commit()

        return self.get(session, user_id, platform)
