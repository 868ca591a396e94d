"""Leave requests router: list, get, submit, decide, withdraw.

Date ordering (end on or after start) is checked on the request body; the
store itself does not enforce it.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from staffsphere.common.constants import LeaveStatus, LeaveType
from staffsphere.common.pagination import PaginatedResponse, PaginationParams
from staffsphere.common.service import CreateOutcome, MutationOutcome
from staffsphere.dependencies import get_record_store, require_session
from staffsphere.leave.schemas import LeaveRequestCreate, LeaveRequestOut, LeaveRequestUpdate
from staffsphere.leave.service import LeaveRequestService
from staffsphere.store.base import RecordStore

router = APIRouter(prefix="", tags=["leave"], dependencies=[Depends(require_session)])


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=PaginatedResponse[LeaveRequestOut])
async def list_leave_requests(
    leave_type: Optional[LeaveType] = Query(None),
    status: Optional[LeaveStatus] = Query(None),
    reason: Optional[str] = Query(None),
    pagination: PaginationParams = Depends(),
    store: RecordStore = Depends(get_record_store),
):
    """Leave requests, most recent start date first."""
    filters = {
        "leave_type": leave_type.value if leave_type else None,
        "status": status.value if status else None,
        "reason": reason,
    }
    outcome = await LeaveRequestService.list(
        store, filters, page=pagination.page, page_size=pagination.page_size,
    )
    return outcome.to_page(pagination.page, pagination.page_size)


@router.get("/by-employee/{employee_id}", response_model=list[LeaveRequestOut])
async def list_leave_for_employee(
    employee_id: int,
    store: RecordStore = Depends(get_record_store),
):
    return (await LeaveRequestService.list_for_employee(store, employee_id)).items


# ── GET /{id} ───────────────────────────────────────────────────────

@router.get("/{request_id}", response_model=LeaveRequestOut)
async def get_leave_request(request_id: int, store: RecordStore = Depends(get_record_store)):
    return await LeaveRequestService.get(store, request_id)


# ── POST / ──────────────────────────────────────────────────────────

@router.post("", response_model=CreateOutcome, status_code=201)
async def submit_leave_request(
    body: LeaveRequestCreate,
    store: RecordStore = Depends(get_record_store),
):
    return await LeaveRequestService.create(store, body.model_dump())


# ── PATCH /{id} ─────────────────────────────────────────────────────

@router.patch("/{request_id}", response_model=MutationOutcome)
async def update_leave_request(
    request_id: int,
    body: LeaveRequestUpdate,
    store: RecordStore = Depends(get_record_store),
):
    """Approve, reject, or amend a leave request."""
    return await LeaveRequestService.update(store, request_id, body)


# ── DELETE /{id} ────────────────────────────────────────────────────

@router.delete("/{request_id}", response_model=MutationOutcome)
async def delete_leave_request(request_id: int, store: RecordStore = Depends(get_record_store)):
    return await LeaveRequestService.delete(store, request_id)
