# app/client/cache.py
"""
Request cache shared by the views.

A `QueryCache` is created once per client session and passed into every
view. Keys are tuples whose first element is the API path, so
invalidating a prefix such as ("/api/content",) drops every category list.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

logger = logging.getLogger(__name__)

QueryKey = tuple[str, ...]

# ----- Key taxonomy: one key per resource collection -----

AUTH_USER: QueryKey = ("/api/auth/user",)
CONTENT: QueryKey = ("/api/content",)
REMINDERS: QueryKey = ("/api/reminders",)
STATS: QueryKey = ("/api/stats",)
ACTIVITY: QueryKey = ("/api/activity",)
INTEGRATIONS: QueryKey = ("/api/integrations",)
ADMIN_STATS: QueryKey = ("/api/admin/stats",)
ADMIN_USERS: QueryKey = ("/api/admin/users",)
ADMIN_CONTENT: QueryKey = ("/api/admin/content",)
ADMIN_REMINDERS: QueryKey = ("/api/admin/reminders",)
ADMIN_ACTIVITIES: QueryKey = ("/api/admin/activities",)


def content_key(category: str | None = None) -> QueryKey:
    if category is None:
        return CONTENT
    return CONTENT + (category,)


def activity_key(limit: int) -> QueryKey:
    return ACTIVITY + (str(limit),)


# Exact prefixes each mutation invalidates.
MUTATION_INVALIDATIONS: dict[str, tuple[QueryKey, ...]] = {
    "create_content": (CONTENT, STATS, ACTIVITY),
    "update_content": (CONTENT, STATS),
    "delete_content": (CONTENT, STATS),
    "upload_content_image": (CONTENT,),
    "create_reminder": (REMINDERS, STATS),
    "update_reminder": (REMINDERS,),
    "delete_reminder": (REMINDERS, STATS),
    "update_stats": (STATS,),
    "upsert_integration": (INTEGRATIONS, STATS),
    "update_theme": (AUTH_USER,),
    "create_subscription": (AUTH_USER,),
    "update_user_role": (ADMIN_USERS,),
    "delete_user": (
        ADMIN_USERS,
        ADMIN_STATS,
        ADMIN_CONTENT,
        ADMIN_REMINDERS,
        ADMIN_ACTIVITIES,
    ),
}


@dataclass
class QueryState:
    status: Literal["success", "error"]
    data: Any = None
    error: Exception | None = None

    @property
    def is_error(self) -> bool:
        return self.status == "error"


@dataclass
class QueryCache:
    """
    Explicit (non-global) cache of query results.

    `history` records every invalidation call so callers can check which
    collections a mutation touched.
    """

    entries: dict[QueryKey, QueryState] = field(default_factory=dict)
    history: list[tuple[QueryKey, ...]] = field(default_factory=list)

    def get(self, key: QueryKey) -> QueryState | None:
        return self.entries.get(key)

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> QueryState:
        """
        Return the cached state for `key`, loading it on a miss.

        Loader errors are stored (status="error") rather than raised, so a
        view can render its error state; the next fetch retries the load.
        """
        state = self.entries.get(key)
        if state is not None and not state.is_error:
            return state

        try:
            state = QueryState(status="success", data=loader())
        except Exception as exc:
            logger.warning(f"Query {key} failed: {exc}")
            state = QueryState(status="error", error=exc)

        self.entries[key] = state
        return state

    def invalidate(self, *prefixes: QueryKey) -> set[QueryKey]:
        """
        Drop every cached key starting with one of `prefixes`.

        Returns:
            The keys that were removed.
        """
        self.history.append(prefixes)
        removed = {
            key
            for key in self.entries
            if any(key[: len(prefix)] == prefix for prefix in prefixes)
        }
        for key in removed:
            del self.entries[key]
        return removed

    def invalidate_for(self, mutation: str) -> set[QueryKey]:
        """Invalidate the key set registered for `mutation`."""
        return self.invalidate(*MUTATION_INVALIDATIONS[mutation])

    def clear(self) -> None:
        self.entries.clear()
