# app/client/state.py
"""
Explicit auth and theme state handed to each view at construction.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.client.api import ApiError, HouseOfTruthClient, UnauthorizedError
from app.client.cache import AUTH_USER, QueryCache

logger = logging.getLogger(__name__)

DEFAULT_THEME = "dark-academia"
THEMES = ("dark-academia", "classical", "modern", "minimalist")


@dataclass
class AuthState:
    user: dict[str, Any] | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.user.get("role") == "admin"

    @classmethod
    def load(cls, client: HouseOfTruthClient, cache: QueryCache) -> "AuthState":
        """
        Resolve the current user through the cache.
        A 401 yields an anonymous state; other errors propagate.
        """
        state = cache.fetch(AUTH_USER, client.get_current_user)
        if state.is_error:
            if isinstance(state.error, UnauthorizedError):
                return cls(user=None)
            raise state.error
        return cls(user=state.data)


@dataclass
class ThemeState:
    client: HouseOfTruthClient
    cache: QueryCache
    theme: str = DEFAULT_THEME

    @classmethod
    def from_auth(
        cls, auth: AuthState, client: HouseOfTruthClient, cache: QueryCache
    ) -> "ThemeState":
        theme = (auth.user or {}).get("theme") or DEFAULT_THEME
        return cls(client=client, cache=cache, theme=theme)

    def set_theme(self, theme: str) -> str:
        """
        Switch theme locally first, then persist it.

        A failed save is logged and the local choice is kept.
        """
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")

        self.theme = theme
        try:
            self.client.update_theme(theme)
        except (ApiError, httpx.HTTPError) as exc:
            logger.error(f"Failed to save theme: {exc}")
            return self.theme

        self.cache.invalidate_for("update_theme")
        return self.theme
