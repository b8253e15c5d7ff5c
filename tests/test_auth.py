from app.models.user import User


def test_missing_token_is_rejected(client):
    r = client.get("/api/auth/user")
    assert r.status_code == 401
    assert r.json()["detail"] == "Authentication required"


def test_invalid_token_is_rejected(client):
    r = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid or expired token"


def test_first_request_provisions_user_from_claims(client, session, token_for):
    token = token_for(
        "user-42",
        first_name="Ada",
        last_name="Lovelace",
        avatar_url="https://cdn.example.com/ada.png",
    )
    r = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})

    assert r.status_code == 200
    body = r.json()
    assert body["id"] == "user-42"
    assert body["email"] == "user-42@example.com"
    assert body["first_name"] == "Ada"
    assert body["profile_image_url"] == "https://cdn.example.com/ada.png"
    assert body["role"] == "user"
    assert body["subscription_status"] == "free"
    assert body["theme"] == "dark-academia"

    assert session.get(User, "user-42") is not None


def test_theme_update_keeps_other_fields(client, session, auth_headers):
    headers = auth_headers("alice")
    client.get("/api/auth/user", headers=headers)

    alice = session.get(User, "alice")
    alice.role = "admin"
    session.add(alice)
    session.commit()

    r = client.put("/api/theme", json={"theme": "minimalist"}, headers=headers)
    assert r.status_code == 200
    assert r.json() == {"theme": "minimalist"}

    me = client.get("/api/auth/user", headers=headers).json()
    assert me["theme"] == "minimalist"
    assert me["role"] == "admin"
    assert me["email"] == "alice@example.com"


def test_unknown_theme_is_a_validation_error(client, auth_headers):
    r = client.put("/api/theme", json={"theme": "neon"}, headers=auth_headers("alice"))
    assert r.status_code == 400
    body = r.json()
    assert body["detail"] == "Invalid input"
    assert body["errors"][0]["loc"][-1] == "theme"
