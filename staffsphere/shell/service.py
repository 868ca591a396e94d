"""Session shell: auth bootstrap, redirect resolution, theme.

The shell is the only writer of session, theme and the initialized flag on
the ``AppStore``. Each auth callback produces at most one navigation and one
identity write. A failed callback clears the identity without navigating;
initialization completes on the first callback whatever its outcome.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from staffsphere.shell.preferences import ThemePreferenceStore
from staffsphere.shell.provider import AuthProvider
from staffsphere.shell.routing import LOGIN_PATH, current_path, resolve_redirect
from staffsphere.shell.schemas import Identity
from staffsphere.shell.state import AppStore

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Authentication failed. Please try signing in again."


class Navigator:
    """Records client navigations; the newest entry is the current location."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def navigate(self, target: str) -> None:
        self.history.append(target)


class SessionShell:

    def __init__(
        self,
        store: AppStore,
        provider: AuthProvider,
        preferences: Optional[ThemePreferenceStore] = None,
        *,
        navigator: Optional[Navigator] = None,
        default_dark_mode: bool = False,
    ) -> None:
        self.store = store
        self.navigator = navigator or Navigator()
        self._provider = provider
        self._preferences = preferences
        self._default_dark_mode = default_dark_mode
        self._bootstrapped = False
        self._theme_restored = False
        self._lock = asyncio.Lock()
        self._location = "/"
        self._navigation: Optional[str] = None

    @property
    def bootstrapped(self) -> bool:
        return self._bootstrapped

    def bootstrap(self) -> bool:
        """Register the auth callbacks; later calls do nothing."""
        if self._bootstrapped:
            return False
        self._provider.setup(
            on_success=self._on_auth_success,
            on_error=self._on_auth_error,
        )
        self._bootstrapped = True
        logger.info("Session shell bootstrapped with %s", type(self._provider).__name__)
        return True

    # ── Auth callback ───────────────────────────────────────────────

    async def handle_callback(self, location: str, token: Optional[str]) -> Optional[str]:
        """Run one auth callback observed at *location*.

        Returns the navigation target, or ``None`` when the provider failed.
        """
        self.bootstrap()
        async with self._lock:
            self._location = current_path(location)
            self._navigation = None
            try:
                await self._provider.authenticate(token)
            finally:
                self.store.mark_initialized()
            target, self._navigation = self._navigation, None
            return target

    def _on_auth_success(self, identity: Optional[Identity]) -> None:
        target = resolve_redirect(self._location, authenticated=identity is not None)
        self._navigate(target)
        if identity is not None:
            self.store.set_user(identity)
            logger.info("User %s signed in", identity.user_id)
        else:
            self.store.clear_user()
        self.store.mark_initialized()

    def _on_auth_error(self, error: Exception) -> None:
        logger.error("Authentication failed: %s", error)
        self.store.clear_user()
        self.store.toasts.error(AUTH_FAILED_MESSAGE)
        self.store.mark_initialized()

    def _navigate(self, target: str) -> None:
        self._navigation = target
        self.navigator.navigate(target)

    # ── Logout ──────────────────────────────────────────────────────

    def logout(self) -> str:
        self.store.clear_user()
        self.navigator.navigate(LOGIN_PATH)
        logger.info("User signed out")
        return LOGIN_PATH

    # ── Theme ───────────────────────────────────────────────────────

    async def restore_theme(self) -> bool:
        """Load the persisted theme once; falls back to the configured default."""
        if self._theme_restored:
            return self.store.dark_mode
        stored = await self._preferences.load() if self._preferences else None
        self.store.set_dark_mode(self._default_dark_mode if stored is None else stored)
        self._theme_restored = True
        return self.store.dark_mode

    async def toggle_theme(self) -> bool:
        await self.restore_theme()
        value = not self.store.dark_mode
        self.store.set_dark_mode(value)
        if self._preferences is not None:
            await self._preferences.save(value)
        return value
