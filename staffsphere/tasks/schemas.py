"""Task Pydantic v2 schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from staffsphere.common.constants import TaskPriority, TaskStatus
from staffsphere.employees.schemas import EmployeeBrief

TASK_FIELDS: tuple[str, ...] = (
    "description",
    "priority",
    "due_date",
    "status",
    "assigned_to",
)


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[date] = None
    status: TaskStatus = TaskStatus.pending
    assigned_to: Optional[int] = None
    employee: Optional[EmployeeBrief] = Field(None, description="Expanded assignee")


class TaskCreate(BaseModel):
    description: str = Field(..., min_length=1)
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[date] = None
    status: TaskStatus = TaskStatus.pending
    assigned_to: Optional[int] = None


class TaskUpdate(BaseModel):
    """Partial update; only the fields sent are written."""

    description: Optional[str] = Field(None, min_length=1)
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[int] = None
