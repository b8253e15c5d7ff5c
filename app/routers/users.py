# app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import ThemeRead, ThemeUpdate
from app.services.user_service import UserService

router = APIRouter(tags=["Users"])

repo = UserRepository()
service = UserService(repo)


@router.put("/theme", response_model=ThemeRead)
def update_theme(
    payload: ThemeUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Save the current user's theme preference.
    """
    user = service.update_theme(session, current_user, payload)
    return ThemeRead(theme=user.theme)
