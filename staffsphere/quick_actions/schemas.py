"""Quick-action Pydantic v2 schemas."""

from __future__ import annotations

import enum
from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel, Field

from staffsphere.common.constants import LeaveType, TaskPriority
from staffsphere.dashboard.schemas import ActivityFeedItem

DEFAULT_LEAVE_DAYS = 7


class QuickActionTab(str, enum.Enum):
    quick_add = "quick-add"
    recent = "recent"


class ActionType(str, enum.Enum):
    task = "task"
    leave = "leave"


def _today() -> date:
    return date.today()


def _week_from_today() -> date:
    return date.today() + timedelta(days=DEFAULT_LEAVE_DAYS)


class QuickActionRequest(BaseModel):
    """Quick-add form contents; validation happens on submit."""

    employee: Optional[int] = Field(None, description="Employee the action is for")
    action_type: ActionType = ActionType.task
    task_description: str = ""
    priority: TaskPriority = TaskPriority.medium
    due_date: date = Field(default_factory=_today)
    leave_type: LeaveType = LeaveType.vacation
    leave_start_date: date = Field(default_factory=_today)
    leave_end_date: date = Field(default_factory=_week_from_today)
    leave_reason: str = ""


class QuickActionResult(BaseModel):
    message: str
    action_type: ActionType
    record_id: Optional[int] = None
    activity_id: Optional[int] = None
    feed: list[ActivityFeedItem] = Field(
        default_factory=list, description="Dashboard activity feed after the action",
    )
