def _create(client, headers, title, due_date, **fields):
    body = {"title": title, "due_date": due_date, "type": "daily", **fields}
    r = client.post("/api/reminders", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_reminders_are_listed_soonest_first(client, auth_headers):
    headers = auth_headers("alice")
    _create(client, headers, "Later", "2024-01-03T09:00:00Z")
    _create(client, headers, "Sooner", "2024-01-02T09:00:00Z")

    r = client.get("/api/reminders", headers=headers)
    assert r.status_code == 200
    assert [x["title"] for x in r.json()] == ["Sooner", "Later"]
    assert all(x["is_completed"] is False for x in r.json())


def test_toggle_completion(client, auth_headers):
    headers = auth_headers("alice")
    reminder = _create(client, headers, "Journal", "2024-01-02T21:00:00Z")

    r = client.put(f"/api/reminders/{reminder['id']}", json={"is_completed": True}, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["is_completed"] is True
    assert body["title"] == "Journal"
    assert body["type"] == "daily"


def test_other_user_cannot_touch_reminder(client, auth_headers):
    reminder = _create(client, auth_headers("alice"), "Journal", "2024-01-02T21:00:00Z")
    bob = auth_headers("bob")

    assert client.put(
        f"/api/reminders/{reminder['id']}", json={"is_completed": True}, headers=bob
    ).status_code == 403
    assert client.delete(f"/api/reminders/{reminder['id']}", headers=bob).status_code == 403
    assert client.get("/api/reminders", headers=bob).json() == []


def test_delete_reminder(client, auth_headers):
    headers = auth_headers("alice")
    reminder = _create(client, headers, "Journal", "2024-01-02T21:00:00Z")

    assert client.delete(f"/api/reminders/{reminder['id']}", headers=headers).status_code == 204
    assert client.get("/api/reminders", headers=headers).json() == []


def test_invalid_reminder_payload(client, auth_headers):
    headers = auth_headers("alice")
    r = client.post(
        "/api/reminders",
        json={"title": "  ", "due_date": "2024-01-02T21:00:00Z", "type": "hourly"},
        headers=headers,
    )
    assert r.status_code == 400
    fields = {err["loc"][-1] for err in r.json()["errors"]}
    assert fields == {"title", "type"}

    r = client.post("/api/reminders", json={"title": "No date"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["loc"][-1] == "due_date"
