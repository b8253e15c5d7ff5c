from sqlmodel import select

from app.models.integration import Integration


def test_upsert_twice_keeps_one_row_with_latest_value(client, session, auth_headers):
    headers = auth_headers("alice")

    first = client.post(
        "/api/integrations",
        json={"platform": "notion", "is_connected": True, "settings": {"workspace": "w1"}},
        headers=headers,
    )
    assert first.status_code == 200

    second = client.post(
        "/api/integrations",
        json={"platform": "notion", "is_connected": False},
        headers=headers,
    )
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["is_connected"] is False
    assert second.json()["settings"] is None

    rows = session.exec(
        select(Integration).where(
            Integration.user_id == "alice", Integration.platform == "notion"
        )
    ).all()
    assert len(rows) == 1


def test_connections_counter_follows_toggles(client, auth_headers):
    headers = auth_headers("alice")
    client.post("/api/integrations", json={"platform": "discord", "is_connected": True}, headers=headers)
    client.post("/api/integrations", json={"platform": "obsidian", "is_connected": True}, headers=headers)
    assert client.get("/api/stats", headers=headers).json()["connections"] == 2

    client.post("/api/integrations", json={"platform": "discord", "is_connected": False}, headers=headers)
    assert client.get("/api/stats", headers=headers).json()["connections"] == 1

    listed = client.get("/api/integrations", headers=headers).json()
    assert [(i["platform"], i["is_connected"]) for i in listed] == [
        ("discord", False),
        ("obsidian", True),
    ]


def test_unknown_platform_is_rejected(client, auth_headers):
    r = client.post(
        "/api/integrations",
        json={"platform": "slack", "is_connected": True},
        headers=auth_headers("alice"),
    )
    assert r.status_code == 400
