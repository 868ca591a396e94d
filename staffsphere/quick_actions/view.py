"""Quick-action form: assign a task or file a leave request in one step.

A valid submit makes exactly one create call (task or leave request) and
then reports one derived activity. Validation runs on submit only and flags
every violated field at once; an invalid form never reaches the store.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from staffsphere.activities.schemas import ActivityCreate, ActivityOut
from staffsphere.activities.service import ActivityService
from staffsphere.common.constants import (
    ActivityStatus,
    ActivityType,
    LeaveStatus,
    TaskPriority,
    TaskStatus,
)
from staffsphere.common.exceptions import AppException, ValidationException
from staffsphere.common.service import CreateOutcome
from staffsphere.leave.service import LeaveRequestService
from staffsphere.notifications.service import ToastQueue
from staffsphere.quick_actions.schemas import (
    ActionType,
    QuickActionRequest,
    QuickActionResult,
    QuickActionTab,
)
from staffsphere.store.base import RecordStore
from staffsphere.tasks.service import TaskService

logger = logging.getLogger(__name__)

ActivitySink = Callable[[ActivityCreate], Awaitable[CreateOutcome]]

_SUCCESS_MESSAGES = {
    ActionType.task: "Task assigned successfully!",
    ActionType.leave: "Leave request submitted successfully!",
}


def validate_quick_action(form: QuickActionRequest) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    if form.employee is None:
        errors["employee"] = ["Employee is required"]

    if form.action_type is ActionType.task:
        if not form.task_description.strip():
            errors["task_description"] = ["Task description is required"]
    elif form.action_type is ActionType.leave:
        if not form.leave_reason.strip():
            errors["leave_reason"] = ["Please provide a reason for leave"]
        if form.leave_end_date < form.leave_start_date:
            errors["leave_end_date"] = ["End date must be after start date"]
    return errors


def build_activity(form: QuickActionRequest) -> ActivityCreate:
    """Activity entry describing a submitted quick action."""
    if form.action_type is ActionType.task:
        return ActivityCreate(
            action=f"was assigned a new {form.priority.value} priority task",
            status=(
                ActivityStatus.critical
                if form.priority is TaskPriority.high
                else ActivityStatus.pending
            ),
            activity_type=ActivityType.task,
            user=form.employee,
        )
    return ActivityCreate(
        action=f"requested {form.leave_type.value} leave",
        status=ActivityStatus.pending,
        activity_type=ActivityType.leave,
        user=form.employee,
    )


class QuickActionForm:

    def __init__(
        self,
        store: RecordStore,
        toasts: ToastQueue,
        *,
        on_activity: Optional[ActivitySink] = None,
        recent_limit: int = 10,
    ) -> None:
        self.store = store
        self._toasts = toasts
        self._on_activity = on_activity
        self.recent_limit = recent_limit
        self.tab = QuickActionTab.quick_add
        self.form = QuickActionRequest()
        self.errors: dict[str, list[str]] = {}
        self.success_message = ""
        self.is_submitting = False
        self.recent: list[ActivityOut] = []

    def switch_tab(self, tab: QuickActionTab) -> None:
        self.tab = tab
        self.errors = {}
        self.success_message = ""

    def set_field(self, name: str, value: Any) -> None:
        """Update one form field and clear its error."""
        self.form = self.form.model_copy(update={name: value})
        self.errors.pop(name, None)

    async def load_recent(self) -> list[ActivityOut]:
        self.recent = (await ActivityService.recent(self.store, self.recent_limit)).items
        return self.recent

    # ── Submit ──────────────────────────────────────────────────────

    async def submit(self) -> Optional[QuickActionResult]:
        """Validate and submit. Returns ``None`` while a submit is in flight."""
        if self.is_submitting:
            return None

        errors = validate_quick_action(self.form)
        if errors:
            self.errors = errors
            self._toasts.error("Please fix the errors in the form")
            raise ValidationException(errors)
        self.errors = {}

        form = self.form
        self.is_submitting = True
        try:
            record = await self._create_record(form)
            activity = await self._report(build_activity(form))
        except AppException as exc:
            logger.error("Quick action %s failed: %s", form.action_type.value, exc.detail)
            self._toasts.error("An error occurred. Please try again.")
            raise
        finally:
            self.is_submitting = False

        message = _SUCCESS_MESSAGES[form.action_type]
        self.success_message = message
        self._toasts.success(message)
        self.form = QuickActionRequest(employee=form.employee)
        return QuickActionResult(
            message=message,
            action_type=form.action_type,
            record_id=record.created_id,
            activity_id=activity.created_id,
        )

    async def _create_record(self, form: QuickActionRequest) -> CreateOutcome:
        if form.action_type is ActionType.task:
            return await TaskService.create(
                self.store,
                {
                    "description": form.task_description.strip(),
                    "priority": form.priority,
                    "due_date": form.due_date,
                    "status": TaskStatus.pending,
                    "assigned_to": form.employee,
                },
            )
        return await LeaveRequestService.create(
            self.store,
            {
                "leave_type": form.leave_type,
                "start_date": form.leave_start_date,
                "end_date": form.leave_end_date,
                "reason": form.leave_reason.strip(),
                "status": LeaveStatus.pending,
                "employee": form.employee,
            },
        )

    async def _report(self, activity: ActivityCreate) -> CreateOutcome:
        if self._on_activity is not None:
            return await self._on_activity(activity)
        return await ActivityService.create(self.store, activity.model_dump())
