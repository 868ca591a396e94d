"""Dashboard Pydantic v2 schemas: department stats and the activity feed."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from staffsphere.activities.schemas import ActivityOut
from staffsphere.common.icons import Icon

DEPARTMENT_STAT_FIELDS: tuple[str, ...] = ("title", "value", "icon", "color", "increase")


class DepartmentStatOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    value: int = 0
    icon: Optional[str] = None
    color: Optional[str] = None
    increase: Optional[str] = None


class StatCard(DepartmentStatOut):
    glyph: Icon


class ActivityFeedItem(ActivityOut):
    glyph: Icon
    badge: str


class DashboardResponse(BaseModel):
    stats: list[StatCard]
    activities: list[ActivityFeedItem]
