"""Employees router: list/search, get, add, edit, delete.

All endpoints require an initialized, authenticated session. Mutations
answer with the refetched list so the client never patches locally.
"""

from fastapi import APIRouter, Depends, Query

from staffsphere.dependencies import get_record_store, get_toasts, require_session
from staffsphere.employees.schemas import (
    EmployeeForm,
    EmployeeListResponse,
    EmployeeMutationResponse,
    EmployeeOut,
)
from staffsphere.employees.service import EmployeeService
from staffsphere.employees.view import EmployeeListView
from staffsphere.notifications.service import ToastQueue
from staffsphere.store.base import RecordStore

router = APIRouter(prefix="", tags=["employees"], dependencies=[Depends(require_session)])


def get_employee_view(
    store: RecordStore = Depends(get_record_store),
    toasts: ToastQueue = Depends(get_toasts),
) -> EmployeeListView:
    return EmployeeListView(store, toasts)


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    search: str = Query("", description="Matches name, department or position"),
    view: EmployeeListView = Depends(get_employee_view),
):
    await view.load()
    employees = view.search(search)
    return EmployeeListResponse(data=employees, total=len(employees), search=search)


# ── GET /{id} ───────────────────────────────────────────────────────

@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee(
    employee_id: int,
    store: RecordStore = Depends(get_record_store),
):
    return await EmployeeService.get(store, employee_id)


# ── POST / ──────────────────────────────────────────────────────────

@router.post("", response_model=EmployeeMutationResponse, status_code=201)
async def add_employee(
    body: EmployeeForm,
    view: EmployeeListView = Depends(get_employee_view),
):
    view.open_add()
    view.form = body
    return await view.submit()


# ── PUT /{id} ───────────────────────────────────────────────────────

@router.put("/{employee_id}", response_model=EmployeeMutationResponse)
async def edit_employee(
    employee_id: int,
    body: EmployeeForm,
    view: EmployeeListView = Depends(get_employee_view),
):
    view.open_edit(await EmployeeService.get(view.store, employee_id))
    view.form = body
    return await view.submit()


# ── DELETE /{id} ────────────────────────────────────────────────────

@router.delete("/{employee_id}", response_model=EmployeeMutationResponse)
async def delete_employee(
    employee_id: int,
    view: EmployeeListView = Depends(get_employee_view),
):
    """Confirm deletion of one employee."""
    view.open_delete(await EmployeeService.get(view.store, employee_id))
    return await view.submit()
