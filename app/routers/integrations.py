# app/routers/integrations.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.integration_repo import IntegrationRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.integration import IntegrationRead, IntegrationUpsert
from app.services.integration_service import IntegrationService

router = APIRouter(prefix="/integrations", tags=["Integrations"])

service = IntegrationService(IntegrationRepository(), StatsRepository())


@router.get("", response_model=list[IntegrationRead])
def list_my_integrations(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.list_integrations(session, current_user)


@router.post("", response_model=IntegrationRead)
def upsert_integration(
    payload: IntegrationUpsert,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Turn an integration on/off for the current user.

    One row per (user, platform); repeated calls overwrite it.
    """
    return service.upsert_integration(session, current_user, payload)
