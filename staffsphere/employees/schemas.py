"""Employee Pydantic v2 schemas: request / response validation.

Naming conventions:
  - *Form      → modal form bodies (write); validated by the list view
  - *Out       → response bodies (read)
  - *Response  → envelopes carrying the refetched list
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from staffsphere.common.constants import EmployeeStatus

EMPLOYEE_FIELDS: tuple[str, ...] = (
    "name",
    "email",
    "phone",
    "department",
    "position",
    "join_date",
    "status",
)


# ── Read ────────────────────────────────────────────────────────────

class EmployeeBrief(BaseModel):
    """Minimal employee info embedded in task, leave and activity responses."""

    id: int
    name: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None


class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.active

    @field_validator("join_date", mode="before")
    @classmethod
    def _blank_date(cls, value):
        return value or None


# ── Write ───────────────────────────────────────────────────────────

class EmployeeForm(BaseModel):
    """Add/edit modal contents; blank strings are caught by view validation."""

    name: str = ""
    email: str = ""
    phone: str = ""
    department: str = ""
    position: str = ""
    join_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.active

    @field_validator("join_date", mode="before")
    @classmethod
    def _blank_date(cls, value):
        return value or None

    @classmethod
    def from_employee(cls, employee: EmployeeOut) -> "EmployeeForm":
        """Seed the edit modal from an existing record."""
        return cls(
            name=employee.name,
            email=employee.email or "",
            phone=employee.phone or "",
            department=employee.department or "",
            position=employee.position or "",
            join_date=employee.join_date,
            status=employee.status,
        )


# ── Responses ───────────────────────────────────────────────────────

class EmployeeListResponse(BaseModel):
    data: list[EmployeeOut]
    total: int = Field(..., description="Employees matching the search term")
    search: str = ""


class EmployeeMutationResponse(BaseModel):
    message: str
    employee_id: Optional[int] = None
    data: list[EmployeeOut] = Field(default_factory=list, description="Refetched list")
