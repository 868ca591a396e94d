"""Icon resolver: symbolic icon names to renderable glyph descriptors."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Icon(BaseModel):
    """Glyph descriptor handed to the renderer.

    ``component`` is the lucide icon component name; ``None`` renders nothing.
    """

    name: str
    component: Optional[str] = None


_ICON_COMPONENTS: dict[str, str] = {
    "user": "User",
    "user-plus": "UserPlus",
    "users": "Users",
    "clipboard": "Clipboard",
    "clipboard-check": "ClipboardCheck",
    "calendar": "Calendar",
    "clock": "Clock",
    "edit": "Edit",
    "trash": "Trash",
    "search": "Search",
    "x": "X",
    "check": "Check",
    "mail": "Mail",
    "phone": "Phone",
    "briefcase": "Briefcase",
    "file-text": "FileText",
    "alert-triangle": "AlertTriangle",
    "check-circle": "CheckCircle",
    "x-circle": "XCircle",
    "trending-up": "TrendingUp",
    "alert-circle": "AlertCircle",
    "pen": "Pen",
    "log-out": "LogOut",
    "sun": "Sun",
    "moon": "Moon",
}


def get_icon(name: Optional[str]) -> Icon:
    """Resolve *name*; unknown names give an empty glyph."""
    key = (name or "").strip().lower()
    return Icon(name=key, component=_ICON_COMPONENTS.get(key))
