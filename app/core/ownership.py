# app/core/ownership.py
from typing import Protocol, TypeVar

from fastapi import HTTPException, status

from app.models.user import User


class OwnedRow(Protocol):
    user_id: str


RowT = TypeVar("RowT", bound=OwnedRow)


def require_owned(row: RowT | None, user: User, label: str) -> RowT:
    """
    Gate every item-level mutation: the row must exist and belong to `user`.

    Args:
        row: the row loaded by primary key (or None).
        user: the authenticated user.
        label: human name used in error messages, e.g. "Content entry".

    Raises:
        HTTPException(404): row does not exist.
        HTTPException(403): row belongs to another user.
    """
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    if row.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{label} does not belong to the current user",
        )
    return row
