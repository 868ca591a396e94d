"""Notification service: bounded in-memory toast queue."""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone

from staffsphere.notifications.schemas import Toast, ToastLevel

MAX_PENDING_TOASTS = 50


class ToastQueue:
    """Toasts waiting to be drained by the client, oldest first.

    When full, the oldest toast is dropped.
    """

    def __init__(self, maxlen: int = MAX_PENDING_TOASTS) -> None:
        self._pending: deque[Toast] = deque(maxlen=maxlen)

    def push(self, level: ToastLevel, message: str) -> Toast:
        toast = Toast(level=level, message=message, created_at=datetime.now(timezone.utc))
        self._pending.append(toast)
        return toast

    def success(self, message: str) -> Toast:
        return self.push(ToastLevel.success, message)

    def error(self, message: str) -> Toast:
        return self.push(ToastLevel.error, message)

    def info(self, message: str) -> Toast:
        return self.push(ToastLevel.info, message)

    def warning(self, message: str) -> Toast:
        return self.push(ToastLevel.warning, message)

    def peek(self) -> list[Toast]:
        return list(self._pending)

    def drain(self) -> list[Toast]:
        """Return and forget every pending toast."""
        toasts = list(self._pending)
        self._pending.clear()
        return toasts

    def __len__(self) -> int:
        return len(self._pending)
