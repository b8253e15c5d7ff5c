import pytest
from sqlmodel import select

from app.models.activity import ActivityLog
from app.models.content import ContentEntry
from app.models.integration import Integration
from app.models.reminder import Reminder
from app.models.stats import UserStats
from app.models.user import User

ADMIN_GETS = [
    "/api/admin/stats",
    "/api/admin/users",
    "/api/admin/content",
    "/api/admin/reminders",
    "/api/admin/activities",
]


def _seed_user(client, headers):
    client.post("/api/content", json={"title": "Ode", "category": "music"}, headers=headers)
    client.post(
        "/api/reminders",
        json={"title": "Practice", "due_date": "2024-01-02T09:00:00Z", "type": "weekly"},
        headers=headers,
    )
    client.post("/api/integrations", json={"platform": "discord", "is_connected": True}, headers=headers)


@pytest.mark.parametrize("path", ADMIN_GETS)
def test_non_admin_is_forbidden(client, auth_headers, path):
    r = client.get(path, headers=auth_headers("alice"))
    assert r.status_code == 403
    assert r.json()["detail"] == "Admin access required"


@pytest.mark.parametrize("path", ADMIN_GETS)
def test_anonymous_is_unauthorized(client, path):
    assert client.get(path).status_code == 401


def test_non_admin_cannot_change_roles_or_delete(client, auth_headers):
    alice = auth_headers("alice")
    client.get("/api/auth/user", headers=alice)

    assert client.put(
        "/api/admin/users/alice/role", json={"role": "admin"}, headers=alice
    ).status_code == 403
    assert client.delete("/api/admin/users/alice", headers=alice).status_code == 403


def test_system_stats(client, admin_headers, auth_headers):
    _seed_user(client, auth_headers("alice"))

    r = client.get("/api/admin/stats", headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["total_users"] == 2
    assert body["total_content"] == 1
    assert body["total_reminders"] == 1
    assert body["total_activities"] == 1
    assert body["subscription_breakdown"] == [{"status": "free", "count": 2}]


def test_admin_listings_span_all_users(client, admin_headers, auth_headers):
    _seed_user(client, auth_headers("alice"))
    _seed_user(client, auth_headers("bob"))

    content = client.get("/api/admin/content", headers=admin_headers).json()
    assert {c["user_id"] for c in content} == {"alice", "bob"}

    reminders = client.get("/api/admin/reminders", headers=admin_headers).json()
    assert len(reminders) == 2

    users = client.get("/api/admin/users", headers=admin_headers).json()
    assert {u["id"] for u in users} == {"admin-1", "alice", "bob"}


def test_change_role(client, admin_headers, auth_headers):
    alice = auth_headers("alice")
    client.get("/api/auth/user", headers=alice)

    r = client.put("/api/admin/users/alice/role", json={"role": "admin"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "admin"

    assert client.get("/api/admin/stats", headers=alice).status_code == 200


def test_change_role_rejects_unknown_role(client, admin_headers):
    r = client.put("/api/admin/users/admin-1/role", json={"role": "owner"}, headers=admin_headers)
    assert r.status_code == 400


def test_change_role_of_missing_user(client, admin_headers):
    r = client.put("/api/admin/users/ghost/role", json={"role": "admin"}, headers=admin_headers)
    assert r.status_code == 404


def test_delete_user_cascades(client, session, admin_headers, auth_headers):
    _seed_user(client, auth_headers("alice"))
    _seed_user(client, auth_headers("bob"))

    r = client.delete("/api/admin/users/alice", headers=admin_headers)
    assert r.status_code == 204

    session.expire_all()
    assert session.get(User, "alice") is None
    for model in (ContentEntry, Reminder, UserStats, ActivityLog, Integration):
        rows = session.exec(select(model).where(model.user_id == "alice")).all()
        assert rows == [], model.__name__

    # Bob is untouched
    assert session.get(User, "bob") is not None
    assert len(session.exec(select(ContentEntry).where(ContentEntry.user_id == "bob")).all()) == 1


def test_delete_missing_user(client, admin_headers):
    assert client.delete("/api/admin/users/ghost", headers=admin_headers).status_code == 404
