# app/services/user_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import ThemeUpdate, UserRoleUpdate

logger = logging.getLogger(__name__)


class UserService:
    """
    Profile and account operations: the caller's own theme, plus the
    admin-only role change and cascading delete.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ----- Self profile -----

    def get_me(self, current_user: User) -> User:
        """The user resolved from the bearer token (provisioned on first call)."""
        return current_user

    def update_theme(
        self,
        session: Session,
        current_user: User,
        payload: ThemeUpdate,
    ) -> User:
        """
        Store the user's theme preference (upsert keyed on identity).
        """
        return self.repo.upsert(session, {"id": current_user.id, "theme": payload.theme})

    # ----- Admin operations -----

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """Newest accounts first."""
        return self.repo.list(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: str) -> User:
        """404 when no account has this id."""
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        session: Session,
        user_id: str,
        payload: UserRoleUpdate,
        acting_admin: User,
    ) -> User:
        """`payload.role` is already limited to "user" or "admin"."""
        user = self.get_user(session, user_id)
        user.role = payload.role
        user = self.repo.update(session, user)
        logger.info(f"Admin {acting_admin.id} set role of {user_id} to {payload.role}")
        return user

    def delete_user(self, session: Session, user_id: str, acting_admin: User) -> None:
        """
        Delete a user and all of their content, reminders, stats,
        activity and integrations (admin only).
        """
        self.get_user(session, user_id)
        self.repo.delete_with_dependents(session, user_id)
        logger.warning(f"Admin {acting_admin.id} deleted user {user_id} and dependent rows")
