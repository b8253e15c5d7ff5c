"""
Pytest configuration and fixtures.

The API runs against an in-memory SQLite database (StaticPool keeps one
connection alive for the whole test) with foreign keys enforced, and
requests carry real HS256 tokens signed with the test secret.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")
os.environ.setdefault("STRIPE_PRICE_ID", "price_test_123")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_123")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.models.user import User


# ================================
# Database Fixtures
# ================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


# ================================
# FastAPI Client Fixtures
# ================================

@pytest.fixture
def client(session):
    """
    HTTP client for the FastAPI app with get_session overridden.

    Usage:
        def test_something(client, auth_headers):
            r = client.get("/api/content", headers=auth_headers("alice"))
    """

    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


# ================================
# Auth helpers
# ================================

def make_token(sub: str, email: str | None = None, **metadata) -> str:
    claims = {"sub": sub, "aud": "authenticated", "user_metadata": metadata}
    if email:
        claims["email"] = email
    return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def token_for():
    def _token_for(sub: str, **metadata) -> str:
        return make_token(sub, email=f"{sub}@example.com", **metadata)

    return _token_for


@pytest.fixture
def auth_headers(token_for):
    def _auth_headers(sub: str, **metadata) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(sub, **metadata)}"}

    return _auth_headers


@pytest.fixture
def admin_headers(client, session, auth_headers):
    """Headers of a user that has been promoted to admin."""
    headers = auth_headers("admin-1")
    client.get("/api/auth/user", headers=headers)

    admin = session.get(User, "admin-1")
    admin.role = "admin"
    session.add(admin)
    session.commit()
    return headers
