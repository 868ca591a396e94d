"""ORM tables backing the SQL record store: one table per collection."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from staffsphere.common.constants import Collection
from staffsphere.database import Base


class EmployeeRecord(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(sa.String(255))
    phone: Mapped[Optional[str]] = mapped_column(sa.String(50))
    department: Mapped[Optional[str]] = mapped_column(sa.String(100))
    position: Mapped[Optional[str]] = mapped_column(sa.String(100))
    join_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    status: Mapped[str] = mapped_column(sa.String(20), default="active")
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )

    __table_args__ = (
        sa.Index("ix_employees_department", "department"),
    )


class TaskRecord(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    priority: Mapped[str] = mapped_column(sa.String(10), default="medium")
    due_date: Mapped[Optional[date]] = mapped_column(sa.Date)
    status: Mapped[str] = mapped_column(sa.String(20), default="pending")
    assigned_to: Mapped[Optional[int]] = mapped_column(
        sa.Integer, sa.ForeignKey("employees.id", ondelete="SET NULL"),
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )


class LeaveRequestRecord(Base):
    __tablename__ = "leave_requests"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    leave_type: Mapped[str] = mapped_column(sa.String(20), default="vacation")
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(sa.Text)
    status: Mapped[str] = mapped_column(sa.String(20), default="pending")
    employee: Mapped[Optional[int]] = mapped_column(
        sa.Integer, sa.ForeignKey("employees.id", ondelete="SET NULL"),
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(),
    )


class ActivityRecord(Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    time: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    status: Mapped[str] = mapped_column(sa.String(20), default="pending")
    activity_type: Mapped[str] = mapped_column(sa.String(20), default="general")
    user: Mapped[Optional[int]] = mapped_column(
        sa.Integer, sa.ForeignKey("employees.id", ondelete="SET NULL"),
    )

    __table_args__ = (
        sa.Index("ix_activities_time", "time"),
    )


class DepartmentStatRecord(Base):
    __tablename__ = "department_stats"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    value: Mapped[int] = mapped_column(sa.Integer, default=0)
    icon: Mapped[Optional[str]] = mapped_column(sa.String(50))
    color: Mapped[Optional[str]] = mapped_column(sa.String(50))
    increase: Mapped[Optional[str]] = mapped_column(sa.String(50))


COLLECTION_MODELS: dict[str, type[Base]] = {
    Collection.employees.value: EmployeeRecord,
    Collection.tasks.value: TaskRecord,
    Collection.leave_requests.value: LeaveRequestRecord,
    Collection.activities.value: ActivityRecord,
    Collection.department_stats.value: DepartmentStatRecord,
}

# field → collection it references, per collection
RELATIONS: dict[str, dict[str, str]] = {
    Collection.tasks.value: {"assigned_to": Collection.employees.value},
    Collection.leave_requests.value: {"employee": Collection.employees.value},
    Collection.activities.value: {"user": Collection.employees.value},
}
