"""Employees page controller: list, local search, modal-driven CRUD.

The view keeps the last successful fetch and filters it locally on every
search change. Each modal action validates, makes exactly one remote call,
and on success closes the modal and refetches the whole list. On failure
the modal stays open with its form untouched.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Any, Iterable, Optional

from staffsphere.common.constants import DEPARTMENTS, MAX_PAGE_SIZE
from staffsphere.common.exceptions import AppException, ValidationException
from staffsphere.common.filters import filter_records
from staffsphere.employees.schemas import EmployeeForm, EmployeeMutationResponse, EmployeeOut
from staffsphere.employees.service import EmployeeService
from staffsphere.notifications.service import ToastQueue
from staffsphere.store.base import RecordStore

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "department", "position")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


class ModalKind(str, enum.Enum):
    add = "add"
    edit = "edit"
    delete = "delete"


_SUCCESS_MESSAGES = {
    ModalKind.add: "Employee added successfully!",
    ModalKind.edit: "Employee updated successfully!",
    ModalKind.delete: "Employee deleted successfully!",
}

_FAILURE_MESSAGES = {
    ModalKind.add: "Failed to add employee. Please try again.",
    ModalKind.edit: "Failed to update employee. Please try again.",
    ModalKind.delete: "Failed to delete employee. Please try again.",
}


def filter_employees(employees: Iterable[Any], term: str) -> list[Any]:
    """Case-insensitive substring match on name, department or position."""
    return filter_records(employees, term, SEARCH_FIELDS)


def validate_employee_form(form: EmployeeForm) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    if not form.name.strip():
        errors["name"] = ["Name is required"]
    if not form.email.strip():
        errors["email"] = ["Email is required"]
    elif not EMAIL_PATTERN.search(form.email):
        errors["email"] = ["Email is invalid"]
    if not form.phone.strip():
        errors["phone"] = ["Phone is required"]
    if not form.department:
        errors["department"] = ["Department is required"]
    elif form.department not in DEPARTMENTS:
        errors["department"] = ["Unknown department"]
    if not form.position.strip():
        errors["position"] = ["Position is required"]
    if form.join_date is None:
        errors["join_date"] = ["Join date is required"]
    return errors


class EmployeeListView:

    def __init__(self, store: RecordStore, toasts: ToastQueue) -> None:
        self.store = store
        self._toasts = toasts
        self.employees: list[EmployeeOut] = []
        self.is_loading = False
        self.search_term = ""
        self.modal: Optional[ModalKind] = None
        self.current: Optional[EmployeeOut] = None
        self.form = EmployeeForm()
        self.form_errors: dict[str, list[str]] = {}
        self.is_submitting = False

    @property
    def filtered(self) -> list[EmployeeOut]:
        return filter_employees(self.employees, self.search_term)

    def search(self, term: str) -> list[EmployeeOut]:
        self.search_term = term
        return self.filtered

    # ── Fetch ───────────────────────────────────────────────────────

    async def load(self) -> list[EmployeeOut]:
        """Replace the cached list with a full fetch; keeps the old one on failure."""
        self.is_loading = True
        try:
            employees: list[EmployeeOut] = []
            page = 1
            while True:
                outcome = await EmployeeService.list(
                    self.store, page=page, page_size=MAX_PAGE_SIZE,
                )
                employees.extend(outcome.items)
                if not outcome.items or len(employees) >= outcome.total:
                    break
                page += 1
        except AppException:
            self._toasts.error("Failed to load employees.")
            raise
        finally:
            self.is_loading = False
        self.employees = employees
        return employees

    # ── Modal lifecycle ─────────────────────────────────────────────

    def open_add(self) -> None:
        self._open(ModalKind.add, None, EmployeeForm())

    def open_edit(self, employee: EmployeeOut) -> None:
        self._open(ModalKind.edit, employee, EmployeeForm.from_employee(employee))

    def open_delete(self, employee: EmployeeOut) -> None:
        self._open(ModalKind.delete, employee, EmployeeForm())

    def close_modal(self) -> None:
        self._open(None, None, EmployeeForm())

    def set_field(self, name: str, value: Any) -> None:
        """Update one form field and clear its error."""
        self.form = self.form.model_copy(update={name: value})
        self.form_errors.pop(name, None)

    def _open(
        self,
        modal: Optional[ModalKind],
        employee: Optional[EmployeeOut],
        form: EmployeeForm,
    ) -> None:
        self.modal = modal
        self.current = employee
        self.form = form
        self.form_errors = {}

    # ── Submit ──────────────────────────────────────────────────────

    async def submit(self) -> Optional[EmployeeMutationResponse]:
        """Confirm the open modal. Returns ``None`` while another submit is running."""
        if self.is_submitting:
            return None
        modal = self.modal
        if modal is None:
            raise RuntimeError("No employee modal is open.")

        if modal is not ModalKind.delete:
            self.form_errors = validate_employee_form(self.form)
            if self.form_errors:
                raise ValidationException(self.form_errors)

        self.is_submitting = True
        try:
            record_id = await self._commit(modal)
        except AppException as exc:
            logger.error("Employee %s failed: %s", modal.value, exc.detail)
            self._toasts.error(_FAILURE_MESSAGES[modal])
            raise
        finally:
            self.is_submitting = False

        message = _SUCCESS_MESSAGES[modal]
        self._toasts.success(message)
        self.close_modal()
        await self.load()
        return EmployeeMutationResponse(
            message=message, employee_id=record_id, data=self.filtered,
        )

    async def _commit(self, modal: ModalKind) -> Optional[int]:
        fields = self.form.model_dump()
        if modal is ModalKind.add:
            outcome = await EmployeeService.create(self.store, fields)
            return outcome.created_id
        if self.current is None:
            raise RuntimeError(f"No employee selected to {modal.value}.")
        if modal is ModalKind.edit:
            await EmployeeService.update(self.store, self.current.id, fields)
        else:
            await EmployeeService.delete(self.store, self.current.id)
        return self.current.id
