# app/client/views.py
"""
View models for the dashboard pages.

Every view receives the API client, the shared `QueryCache` and the
`AuthState` it renders for; nothing is looked up from module globals.
Reads go through the cache, mutations go to the API and then invalidate
the keys registered for them in `MUTATION_INVALIDATIONS`.
"""

from datetime import datetime
from typing import Any

from app.client.api import HouseOfTruthClient
from app.client.cache import (
    ADMIN_ACTIVITIES,
    ADMIN_CONTENT,
    ADMIN_REMINDERS,
    ADMIN_STATS,
    ADMIN_USERS,
    INTEGRATIONS,
    REMINDERS,
    STATS,
    QueryCache,
    QueryState,
    activity_key,
    content_key,
)
from app.client.state import AuthState, ThemeState
from app.client.urgency import classify_urgency, counts_by_category, upcoming_reminders

PLATFORMS = ("discord", "notion", "obsidian")


class AccessDenied(Exception):
    """The current user may not open this view."""


class BaseView:

    def __init__(self, client: HouseOfTruthClient, cache: QueryCache, auth: AuthState):
        if not auth.is_authenticated:
            raise AccessDenied("Login required")
        self.client = client
        self.cache = cache
        self.auth = auth

    def _mutate(self, mutation: str, call, *args, **kwargs) -> Any:
        result = call(*args, **kwargs)
        self.cache.invalidate_for(mutation)
        return result


def _with_urgency(reminder: dict, now: datetime) -> dict:
    return {
        **reminder,
        "urgency": classify_urgency(reminder["due_date"], reminder["is_completed"], now),
    }


class DashboardView(BaseView):
    """Home page: counters, activity feed, upcoming reminders, collections."""

    def stats(self) -> QueryState:
        return self.cache.fetch(STATS, self.client.get_stats)

    def recent_activity(self, limit: int = 10) -> QueryState:
        return self.cache.fetch(activity_key(limit), lambda: self.client.list_activity(limit))

    def upcoming_reminders(self, now: datetime, limit: int = 3) -> list[dict]:
        state = self.cache.fetch(REMINDERS, self.client.list_reminders)
        if state.is_error:
            return []
        return [_with_urgency(r, now) for r in upcoming_reminders(state.data, limit)]

    def collection_counts(self) -> dict[str, int]:
        state = self.cache.fetch(content_key(), lambda: self.client.list_content())
        if state.is_error:
            return counts_by_category([])
        return counts_by_category(state.data)


class ContentView(BaseView):
    """One category page (literature, rituals, aesthetics, music)."""

    def __init__(
        self,
        client: HouseOfTruthClient,
        cache: QueryCache,
        auth: AuthState,
        category: str,
    ):
        super().__init__(client, cache, auth)
        self.category = category

    def entries(self) -> QueryState:
        return self.cache.fetch(
            content_key(self.category),
            lambda: self.client.list_content(self.category),
        )

    def create(self, title: str, **fields) -> dict:
        return self._mutate(
            "create_content",
            self.client.create_content,
            title=title,
            category=self.category,
            **fields,
        )

    def update(self, entry_id: int, **fields) -> dict:
        return self._mutate("update_content", self.client.update_content, entry_id, **fields)

    def delete(self, entry_id: int) -> None:
        self._mutate("delete_content", self.client.delete_content, entry_id)


class RemindersView(BaseView):

    def reminders(self, now: datetime) -> list[dict]:
        """All reminders, soonest first, each tagged with its urgency."""
        state = self.cache.fetch(REMINDERS, self.client.list_reminders)
        if state.is_error:
            return []
        return [_with_urgency(r, now) for r in state.data]

    def create(self, title: str, due_date: datetime, type: str = "custom", **fields) -> dict:
        return self._mutate(
            "create_reminder",
            self.client.create_reminder,
            title=title,
            due_date=due_date.isoformat(),
            type=type,
            **fields,
        )

    def toggle(self, reminder: dict) -> dict:
        return self._mutate(
            "update_reminder",
            self.client.update_reminder,
            reminder["id"],
            is_completed=not reminder["is_completed"],
        )

    def delete(self, reminder_id: int) -> None:
        self._mutate("delete_reminder", self.client.delete_reminder, reminder_id)


class SettingsView(BaseView):
    """Integration toggles and theme picker."""

    def __init__(
        self,
        client: HouseOfTruthClient,
        cache: QueryCache,
        auth: AuthState,
        theme: ThemeState,
    ):
        super().__init__(client, cache, auth)
        self.theme = theme

    def integrations(self) -> dict[str, bool]:
        """Connection flag per platform; platforms never toggled are off."""
        state = self.cache.fetch(INTEGRATIONS, self.client.list_integrations)
        flags = dict.fromkeys(PLATFORMS, False)
        if not state.is_error:
            for row in state.data:
                flags[row["platform"]] = row["is_connected"]
        return flags

    def set_integration(self, platform: str, is_connected: bool) -> dict:
        return self._mutate(
            "upsert_integration",
            self.client.upsert_integration,
            platform,
            is_connected,
        )

    def set_theme(self, theme: str) -> str:
        return self.theme.set_theme(theme)


class AdminView(BaseView):
    """
    Admin dashboard. Refuses non-admins up front; the API enforces the
    same rule with 403.
    """

    def __init__(self, client: HouseOfTruthClient, cache: QueryCache, auth: AuthState):
        super().__init__(client, cache, auth)
        if not auth.is_admin:
            raise AccessDenied("Admin access required")

    def stats(self) -> QueryState:
        return self.cache.fetch(ADMIN_STATS, self.client.admin_stats)

    def users(self) -> QueryState:
        return self.cache.fetch(ADMIN_USERS, self.client.admin_users)

    def content(self) -> QueryState:
        return self.cache.fetch(ADMIN_CONTENT, self.client.admin_content)

    def reminders(self) -> QueryState:
        return self.cache.fetch(ADMIN_REMINDERS, self.client.admin_reminders)

    def activities(self) -> QueryState:
        return self.cache.fetch(ADMIN_ACTIVITIES, self.client.admin_activities)

    def change_role(self, user_id: str, role: str) -> dict:
        return self._mutate("update_user_role", self.client.update_user_role, user_id, role)

    def delete_user(self, user_id: str) -> None:
        self._mutate("delete_user", self.client.delete_user, user_id)
