"""Activities router: list and append only."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from staffsphere.activities.schemas import ActivityCreate, ActivityOut
from staffsphere.activities.service import ActivityService
from staffsphere.common.constants import ActivityStatus, ActivityType
from staffsphere.common.pagination import PaginatedResponse, PaginationParams
from staffsphere.common.service import CreateOutcome
from staffsphere.dependencies import get_record_store, require_session
from staffsphere.store.base import RecordStore

router = APIRouter(prefix="", tags=["activities"], dependencies=[Depends(require_session)])


@router.get("", response_model=PaginatedResponse[ActivityOut])
async def list_activities(
    status: Optional[ActivityStatus] = Query(None),
    activity_type: Optional[ActivityType] = Query(None),
    action: Optional[str] = Query(None),
    pagination: PaginationParams = Depends(),
    store: RecordStore = Depends(get_record_store),
):
    """Activity feed, newest first."""
    filters = {
        "status": status.value if status else None,
        "activity_type": activity_type.value if activity_type else None,
        "action": action,
    }
    outcome = await ActivityService.list(
        store, filters, page=pagination.page, page_size=pagination.page_size,
    )
    return outcome.to_page(pagination.page, pagination.page_size)


@router.post("", response_model=CreateOutcome, status_code=201)
async def create_activity(body: ActivityCreate, store: RecordStore = Depends(get_record_store)):
    return await ActivityService.create(store, body.model_dump())
