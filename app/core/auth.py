# app/core/auth.py
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository

settings = get_settings()
user_repo = UserRepository()

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does not raise here,
#   so require_auth can answer with a consistent 401 body.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a bearer token issued by Supabase Auth and return its claims.

    The HS256 signature and `exp` are checked against SUPABASE_JWT_SECRET.
    `aud` is ignored; Supabase sets it per project.

    Raises:
        HTTPException(401): bad signature, malformed or expired token.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def profile_from_claims(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Map identity-provider claims to User columns.

    Supabase puts profile data under `user_metadata`; only claims that
    are actually present are returned so an upsert never blanks a field.
    """
    metadata = payload.get("user_metadata") or {}
    values: dict[str, Any] = {"id": payload["sub"]}

    if payload.get("email"):
        values["email"] = payload["email"]
    if metadata.get("first_name"):
        values["first_name"] = metadata["first_name"]
    if metadata.get("last_name"):
        values["last_name"] = metadata["last_name"]

    avatar = metadata.get("avatar_url") or metadata.get("picture")
    if avatar:
        values["profile_image_url"] = avatar

    return values


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a Supabase JWT.

    Flow:
      1. If no Authorization header => anonymous => return None.
      2. Decode JWT => extract 'sub' (auth user id).
      3. Find user profile in users.
      4. If missing, sync it from the token claims with an upsert
         keyed on the id (role defaults to "user").

    Returns:
        User instance if authenticated, else None.

    Raises:
        HTTPException(401): if token is malformed or missing 'sub'.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")

    if not sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub",
        )

    user = user_repo.get_by_id(session, sub)
    if user is None:
        user = user_repo.upsert(session, profile_from_claims(payload))

    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Anonymous callers (missing JWT) are rejected with 401; the client
    treats that as "log in again".

    Raises:
        HTTPException(401): if user is None.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Gate for the /admin surface: only role "admin" passes, anyone else
    gets 403.
    """
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
