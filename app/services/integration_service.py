# app/services/integration_service.py
from sqlmodel import Session

from app.models.integration import Integration
from app.models.user import User
from app.repositories.integration_repo import IntegrationRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.integration import IntegrationUpsert


class IntegrationService:
    """
    Integration toggles (discord, notion, obsidian).

    The toggles are mock connections: nothing is called on the
    third-party side. The `connections` counter mirrors how many are on.
    """

    def __init__(self, repo: IntegrationRepository, stats_repo: StatsRepository):
        self.repo = repo
        self.stats_repo = stats_repo

    def list_integrations(self, session: Session, user: User) -> list[Integration]:
        return self.repo.list_for_user(session, user.id)

    def upsert_integration(
        self, session: Session, user: User, payload: IntegrationUpsert
    ) -> Integration:
        integration = self.repo.upsert(
            session,
            user_id=user.id,
            platform=payload.platform,
            is_connected=payload.is_connected,
            settings=payload.settings,
        )

        connected = self.repo.count_connected(session, user.id)
        self.stats_repo.upsert(session, user.id, {"connections": connected})

        session.refresh(integration)
        return integration
