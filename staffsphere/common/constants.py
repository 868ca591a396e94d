"""Enums and constants for StaffSphere: matching record-store field values."""

from __future__ import annotations

import enum


# ── Employees ───────────────────────────────────────────────────────

class EmployeeStatus(str, enum.Enum):
    active = "active"
    on_leave = "on-leave"


DEPARTMENTS: tuple[str, ...] = (
    "Human Resources",
    "Engineering",
    "Marketing",
    "Finance",
    "Sales",
    "Operations",
    "Customer Support",
    "Research & Development",
)


# ── Tasks ───────────────────────────────────────────────────────────

class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveType(str, enum.Enum):
    vacation = "vacation"
    sick = "sick"
    personal = "personal"
    maternity = "maternity"
    bereavement = "bereavement"


class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# ── Activity feed ───────────────────────────────────────────────────

class ActivityStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    critical = "critical"


class ActivityType(str, enum.Enum):
    task = "task"
    leave = "leave"
    general = "general"


# ── Record-store collections ────────────────────────────────────────

class Collection(str, enum.Enum):
    employees = "employees"
    tasks = "tasks"
    leave_requests = "leave_requests"
    activities = "activities"
    department_stats = "department_stats"


# ── Pagination ──────────────────────────────────────────────────────

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
