"""Leave request Pydantic v2 schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staffsphere.common.constants import LeaveStatus, LeaveType
from staffsphere.employees.schemas import EmployeeBrief

LEAVE_REQUEST_FIELDS: tuple[str, ...] = (
    "leave_type",
    "start_date",
    "end_date",
    "reason",
    "status",
    "employee",
)


class LeaveRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    leave_type: LeaveType = LeaveType.vacation
    start_date: date
    end_date: date
    reason: Optional[str] = None
    status: LeaveStatus = LeaveStatus.pending
    employee: Optional[int] = None
    employee_details: Optional[EmployeeBrief] = None


class LeaveRequestCreate(BaseModel):
    leave_type: LeaveType = LeaveType.vacation
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=1)
    status: LeaveStatus = LeaveStatus.pending
    employee: Optional[int] = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "LeaveRequestCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class LeaveRequestUpdate(BaseModel):
    """Partial update, typically a status decision."""

    leave_type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
    status: Optional[LeaveStatus] = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "LeaveRequestUpdate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self
