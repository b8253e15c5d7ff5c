from types import SimpleNamespace

import pytest
from sqlmodel import select

from app.models.activity import ActivityLog
from app.models.content import ContentEntry


def _create(client, headers, **fields):
    body = {"title": "Meditations", "category": "literature", **fields}
    r = client.post("/api/content", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_new_entry_is_listed_first(client, auth_headers):
    headers = auth_headers("alice")
    _create(client, headers, title="First")
    newest = _create(client, headers, title="Second", tags=[" stoic ", "", "rome"])

    r = client.get("/api/content/literature", headers=headers)
    assert r.status_code == 200
    entries = r.json()
    assert [e["title"] for e in entries] == ["Second", "First"]
    assert entries[0]["id"] == newest["id"]
    assert entries[0]["tags"] == ["stoic", "rome"]


def test_category_filter(client, auth_headers):
    headers = auth_headers("alice")
    _create(client, headers, title="Book", category="literature")
    _create(client, headers, title="Album", category="music")

    assert [e["title"] for e in client.get("/api/content/music", headers=headers).json()] == ["Album"]
    assert len(client.get("/api/content", headers=headers).json()) == 2


def test_unknown_category_is_rejected(client, auth_headers):
    headers = auth_headers("alice")
    assert client.get("/api/content/poetry", headers=headers).status_code == 400

    r = client.post(
        "/api/content", json={"title": "x", "category": "poetry"}, headers=headers
    )
    assert r.status_code == 400
    assert r.json()["errors"][0]["loc"][-1] == "category"


def test_listing_never_returns_other_users_rows(client, auth_headers):
    _create(client, auth_headers("alice"), title="Alice's")
    _create(client, auth_headers("bob"), title="Bob's")

    alice_rows = client.get("/api/content", headers=auth_headers("alice")).json()
    assert [e["title"] for e in alice_rows] == ["Alice's"]
    assert all(e["user_id"] == "alice" for e in alice_rows)


def test_owner_cannot_be_set_from_body(client, auth_headers):
    r = client.post(
        "/api/content",
        json={"title": "Forged", "category": "music", "user_id": "bob"},
        headers=auth_headers("alice"),
    )
    assert r.status_code == 400


def test_create_logs_activity_and_counts_entry(client, session, auth_headers):
    headers = auth_headers("alice")
    _create(client, headers, title="Morning walk", category="rituals")

    activity = session.exec(select(ActivityLog).where(ActivityLog.user_id == "alice")).all()
    assert len(activity) == 1
    assert activity[0].action == "content_created"
    assert activity[0].description == 'Added "Morning walk" to rituals'

    stats = client.get("/api/stats", headers=headers).json()
    assert stats["total_entries"] == 1
    assert stats["active_rituals"] == 1


def test_update_own_entry(client, auth_headers):
    headers = auth_headers("alice")
    entry = _create(client, headers)

    r = client.put(
        f"/api/content/{entry['id']}",
        json={"content": "Book II", "tags": ["marcus"]},
        headers=headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["content"] == "Book II"
    assert body["tags"] == ["marcus"]
    assert body["title"] == "Meditations"


def test_other_user_cannot_update_or_delete(client, session, auth_headers):
    entry = _create(client, auth_headers("alice"))
    bob = auth_headers("bob")

    r = client.put(f"/api/content/{entry['id']}", json={"title": "Mine now"}, headers=bob)
    assert r.status_code == 403

    r = client.delete(f"/api/content/{entry['id']}", headers=bob)
    assert r.status_code == 403

    row = session.get(ContentEntry, entry["id"])
    session.refresh(row)
    assert row.title == "Meditations"


def test_missing_entry_is_404(client, auth_headers):
    headers = auth_headers("alice")
    assert client.put("/api/content/999", json={"title": "x"}, headers=headers).status_code == 404
    assert client.delete("/api/content/999", headers=headers).status_code == 404


def test_delete_own_entry(client, auth_headers):
    headers = auth_headers("alice")
    entry = _create(client, headers)

    r = client.delete(f"/api/content/{entry['id']}", headers=headers)
    assert r.status_code == 204
    assert client.get("/api/content", headers=headers).json() == []
    assert client.get("/api/stats", headers=headers).json()["total_entries"] == 0


STORAGE_PREFIX = "https://test.supabase.co/storage/v1/object/public/assets/"


@pytest.fixture
def storage(monkeypatch):
    """Replace Supabase Storage with in-memory lists of uploads and deletions."""
    from app.services import content_service

    fake = SimpleNamespace(uploads=[], deleted=[])

    def upload(path, data, content_type):
        fake.uploads.append((path, data, content_type))
        return STORAGE_PREFIX + path

    monkeypatch.setattr(content_service, "upload_to_storage", upload)
    monkeypatch.setattr(content_service, "delete_public_url", fake.deleted.append)
    return fake


def _upload(client, headers, entry_id):
    return client.post(
        f"/api/content/{entry_id}/image",
        files={"file": ("cover.png", b"\x89PNG", "image/png")},
        headers=headers,
    )


def test_image_upload_replaces_previous(client, auth_headers, storage):
    headers = auth_headers("alice")
    entry = _create(client, headers)

    first = _upload(client, headers, entry["id"]).json()["image_url"]
    r = _upload(client, headers, entry["id"])

    assert r.status_code == 200
    assert r.json()["image_url"].endswith(".png")
    assert r.json()["image_url"] != first
    assert storage.uploads[0][0].startswith(f"users/alice/content/{entry['id']}/")
    assert storage.deleted == [first]


def test_external_image_link_is_never_deleted(client, auth_headers, storage):
    headers = auth_headers("alice")
    entry = _create(client, headers, image_url="https://old.example.com/cover.png")

    assert _upload(client, headers, entry["id"]).status_code == 200
    assert storage.deleted == []


def test_entry_pointing_at_another_users_file_does_not_delete_it(
    client, auth_headers, storage
):
    headers = auth_headers("alice")
    bobs_file = STORAGE_PREFIX + "users/bob/content/1/cover.png"
    replaced = _create(client, headers, image_url=bobs_file)
    deleted = _create(client, headers, title="Second", image_url=bobs_file)

    assert _upload(client, headers, replaced["id"]).status_code == 200
    assert client.delete(f"/api/content/{deleted['id']}", headers=headers).status_code == 204
    assert storage.deleted == []


def test_storage_failure_does_not_undo_delete(client, auth_headers, storage, monkeypatch):
    from app.services import content_service

    def broken(url):
        raise RuntimeError("storage unavailable")

    headers = auth_headers("alice")
    entry = _create(client, headers)
    _upload(client, headers, entry["id"])
    monkeypatch.setattr(content_service, "delete_public_url", broken)

    r = client.delete(f"/api/content/{entry['id']}", headers=headers)
    assert r.status_code == 204
    assert client.get("/api/content", headers=headers).json() == []


def _stats(client, headers):
    return client.get("/api/stats", headers=headers).json()


def test_moving_entry_out_of_rituals_lowers_active_rituals(client, auth_headers):
    headers = auth_headers("alice")
    entry = _create(client, headers, title="Tea", category="rituals")

    r = client.put(f"/api/content/{entry['id']}", json={"category": "music"}, headers=headers)
    assert r.status_code == 200

    stats = _stats(client, headers)
    assert stats["active_rituals"] == 0
    assert stats["total_entries"] == 1


def test_moving_entry_into_rituals_raises_active_rituals(client, auth_headers):
    headers = auth_headers("alice")
    entry = _create(client, headers, title="Walk", category="literature")

    client.put(f"/api/content/{entry['id']}", json={"category": "rituals"}, headers=headers)

    stats = _stats(client, headers)
    assert stats["active_rituals"] == 1
    assert stats["total_entries"] == 1


def test_update_within_category_leaves_counters(client, auth_headers):
    headers = auth_headers("alice")
    entry = _create(client, headers, title="Tea", category="rituals")

    client.put(f"/api/content/{entry['id']}", json={"title": "Green tea"}, headers=headers)

    stats = _stats(client, headers)
    assert stats["active_rituals"] == 1
    assert stats["total_entries"] == 1


def test_deleting_ritual_lowers_both_counters(client, auth_headers):
    headers = auth_headers("alice")
    _create(client, headers, title="Tea", category="rituals")
    ritual = _create(client, headers, title="Walk", category="rituals")

    client.delete(f"/api/content/{ritual['id']}", headers=headers)

    stats = _stats(client, headers)
    assert stats["active_rituals"] == 1
    assert stats["total_entries"] == 1


def test_image_upload_rejects_unsupported_type(client, auth_headers):
    headers = auth_headers("alice")
    entry = _create(client, headers)

    r = client.post(
        f"/api/content/{entry['id']}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert r.status_code == 400
