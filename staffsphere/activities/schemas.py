"""Activity feed Pydantic v2 schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from staffsphere.common.constants import ActivityStatus, ActivityType
from staffsphere.employees.schemas import EmployeeBrief

ACTIVITY_FIELDS: tuple[str, ...] = (
    "action",
    "time",
    "status",
    "activity_type",
    "user",
)


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action: str
    time: Optional[datetime] = None
    status: ActivityStatus = ActivityStatus.pending
    activity_type: ActivityType = ActivityType.general
    user: Optional[int] = None
    user_details: Optional[EmployeeBrief] = None

    @computed_field  # type: ignore[misc]
    @property
    def actor_name(self) -> Optional[str]:
        return self.user_details.name if self.user_details else None


class ActivityCreate(BaseModel):
    action: str = Field(..., min_length=1)
    time: Optional[datetime] = Field(None, description="Defaults to now (UTC)")
    status: ActivityStatus = ActivityStatus.pending
    activity_type: ActivityType = ActivityType.general
    user: Optional[int] = None
