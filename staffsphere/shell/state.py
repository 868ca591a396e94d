"""Application state container: session, theme, initialization, toasts.

One ``AppStore`` exists per application instance. Views read it; only the
session shell writes session, theme and the initialization flag.
Subscribers receive ``(key, value)`` after every write.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from staffsphere.notifications.service import ToastQueue
from staffsphere.shell.schemas import Identity, Session

Listener = Callable[[str, Any], None]


class AppStore:

    def __init__(self, *, dark_mode: bool = False) -> None:
        self._session = Session()
        self._dark_mode = dark_mode
        self._initialized = False
        self._listeners: list[Listener] = []
        self.toasts = ToastQueue()

    # ── Reads ──────────────────────────────────────────────────────

    @property
    def session(self) -> Session:
        return self._session

    @property
    def user(self) -> Optional[Identity]:
        return self._session.user

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    @property
    def initialized(self) -> bool:
        return self._initialized

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ── Writes (session shell only) ────────────────────────────────

    def set_user(self, user: Identity) -> None:
        self._session = Session(is_authenticated=True, user=user)
        self._emit("session", self._session)

    def clear_user(self) -> None:
        self._session = Session()
        self._emit("session", self._session)

    def set_dark_mode(self, value: bool) -> None:
        self._dark_mode = value
        self._emit("dark_mode", value)

    def mark_initialized(self) -> bool:
        """Flip the initialized flag; returns False when it was already set."""
        if self._initialized:
            return False
        self._initialized = True
        self._emit("initialized", True)
        return True

    def _emit(self, key: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(key, value)
