# app/routers/auth.py
from fastapi import APIRouter, Depends

from app.core.auth import require_auth
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserRead
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = UserService(repo)


@router.get("/user", response_model=UserRead)
def read_current_user(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's record.

    The row is synced from the token claims on first request.
    """
    return service.get_me(current_user)
