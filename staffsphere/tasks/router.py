"""Tasks router: list, get, create, update, delete."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from staffsphere.common.constants import TaskPriority, TaskStatus
from staffsphere.common.pagination import PaginatedResponse, PaginationParams
from staffsphere.common.service import CreateOutcome, MutationOutcome
from staffsphere.dependencies import get_record_store, require_session
from staffsphere.store.base import RecordStore
from staffsphere.tasks.schemas import TaskCreate, TaskOut, TaskUpdate
from staffsphere.tasks.service import TaskService

router = APIRouter(prefix="", tags=["tasks"], dependencies=[Depends(require_session)])


@router.get("", response_model=PaginatedResponse[TaskOut])
async def list_tasks(
    description: Optional[str] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    status: Optional[TaskStatus] = Query(None),
    pagination: PaginationParams = Depends(),
    store: RecordStore = Depends(get_record_store),
):
    """Tasks whose fields contain the given values, earliest due first."""
    filters = {
        "description": description,
        "priority": priority.value if priority else None,
        "status": status.value if status else None,
    }
    outcome = await TaskService.list(
        store, filters, page=pagination.page, page_size=pagination.page_size,
    )
    return outcome.to_page(pagination.page, pagination.page_size)


@router.get("/by-employee/{employee_id}", response_model=list[TaskOut])
async def list_tasks_for_employee(
    employee_id: int,
    store: RecordStore = Depends(get_record_store),
):
    return (await TaskService.list_for_employee(store, employee_id)).items


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(task_id: int, store: RecordStore = Depends(get_record_store)):
    return await TaskService.get(store, task_id)


@router.post("", response_model=CreateOutcome, status_code=201)
async def create_task(body: TaskCreate, store: RecordStore = Depends(get_record_store)):
    return await TaskService.create(store, body.model_dump())


@router.patch("/{task_id}", response_model=MutationOutcome)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    store: RecordStore = Depends(get_record_store),
):
    return await TaskService.update(store, task_id, body)


@router.delete("/{task_id}", response_model=MutationOutcome)
async def delete_task(task_id: int, store: RecordStore = Depends(get_record_store)):
    return await TaskService.delete(store, task_id)
