# app/client/api.py
"""
HTTP client for the House of Truth API.

Works with any `httpx.Client` pointed at the API, including FastAPI's
`TestClient`.
"""

from typing import Any

import httpx


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: Any, errors: list | None = None):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []


class UnauthorizedError(ApiError):
    """401: the token is missing or expired; the user must log in again."""


class HouseOfTruthClient:

    def __init__(self, http: httpx.Client, token: str | None = None):
        self.http = http
        self.token = token

    # ----- plumbing -----

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.http.request(method, path, headers=headers, **kwargs)

        if response.status_code == 204:
            return None
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {"detail": response.text}

        detail = body.get("detail", response.reason_phrase)
        errors = body.get("errors")
        if response.status_code == 401:
            raise UnauthorizedError(response.status_code, detail, errors)
        raise ApiError(response.status_code, detail, errors)

    # ----- user -----

    def get_current_user(self) -> dict:
        return self._request("GET", "/api/auth/user")

    def update_theme(self, theme: str) -> dict:
        return self._request("PUT", "/api/theme", json={"theme": theme})

    # ----- content -----

    def list_content(self, category: str | None = None) -> list[dict]:
        path = "/api/content" if category is None else f"/api/content/{category}"
        return self._request("GET", path)

    def create_content(self, **fields) -> dict:
        return self._request("POST", "/api/content", json=fields)

    def update_content(self, entry_id: int, **fields) -> dict:
        return self._request("PUT", f"/api/content/{entry_id}", json=fields)

    def delete_content(self, entry_id: int) -> None:
        self._request("DELETE", f"/api/content/{entry_id}")

    def upload_content_image(
        self, entry_id: int, filename: str, data: bytes, content_type: str
    ) -> dict:
        files = {"file": (filename, data, content_type)}
        return self._request("POST", f"/api/content/{entry_id}/image", files=files)

    # ----- reminders -----

    def list_reminders(self) -> list[dict]:
        return self._request("GET", "/api/reminders")

    def create_reminder(self, **fields) -> dict:
        return self._request("POST", "/api/reminders", json=fields)

    def update_reminder(self, reminder_id: int, **fields) -> dict:
        return self._request("PUT", f"/api/reminders/{reminder_id}", json=fields)

    def delete_reminder(self, reminder_id: int) -> None:
        self._request("DELETE", f"/api/reminders/{reminder_id}")

    # ----- stats / activity -----

    def get_stats(self) -> dict:
        return self._request("GET", "/api/stats")

    def update_stats(self, **counters) -> dict:
        return self._request("PUT", "/api/stats", json=counters)

    def list_activity(self, limit: int = 10) -> list[dict]:
        return self._request("GET", "/api/activity", params={"limit": limit})

    # ----- integrations -----

    def list_integrations(self) -> list[dict]:
        return self._request("GET", "/api/integrations")

    def upsert_integration(
        self, platform: str, is_connected: bool, settings: dict | None = None
    ) -> dict:
        body = {"platform": platform, "is_connected": is_connected, "settings": settings}
        return self._request("POST", "/api/integrations", json=body)

    # ----- billing -----

    def create_subscription(self) -> dict:
        return self._request("POST", "/api/create-subscription")

    # ----- admin -----

    def admin_stats(self) -> dict:
        return self._request("GET", "/api/admin/stats")

    def admin_users(self) -> list[dict]:
        return self._request("GET", "/api/admin/users")

    def admin_content(self) -> list[dict]:
        return self._request("GET", "/api/admin/content")

    def admin_reminders(self) -> list[dict]:
        return self._request("GET", "/api/admin/reminders")

    def admin_activities(self) -> list[dict]:
        return self._request("GET", "/api/admin/activities")

    def update_user_role(self, user_id: str, role: str) -> dict:
        return self._request("PUT", f"/api/admin/users/{user_id}/role", json={"role": role})

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/api/admin/users/{user_id}")
