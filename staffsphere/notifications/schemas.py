"""Notification Pydantic v2 schemas: transient toasts."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ToastLevel(str, enum.Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"


class Toast(BaseModel):
    """A single user-visible notification awaiting delivery."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    level: ToastLevel
    message: str
    created_at: datetime


class ToastListResponse(BaseModel):
    data: list[Toast]
