"""Dashboard router: the home page and read-only department stats."""

from fastapi import APIRouter, Depends, Request

from staffsphere.common.constants import MAX_PAGE_SIZE
from staffsphere.common.exceptions import NotFoundException
from staffsphere.dashboard.schemas import DashboardResponse, DepartmentStatOut
from staffsphere.dashboard.service import DepartmentStatsService
from staffsphere.dashboard.view import DashboardView
from staffsphere.dependencies import get_record_store, get_toasts, require_session
from staffsphere.notifications.service import ToastQueue
from staffsphere.store.base import RecordStore

router = APIRouter(prefix="", tags=["dashboard"], dependencies=[Depends(require_session)])
stats_router = APIRouter(
    prefix="", tags=["department-stats"], dependencies=[Depends(require_session)],
)


# ═════════════════════════════════════════════════════════════════════
# Dashboard
# ═════════════════════════════════════════════════════════════════════


def get_dashboard_view(
    request: Request,
    store: RecordStore = Depends(get_record_store),
    toasts: ToastQueue = Depends(get_toasts),
) -> DashboardView:
    return DashboardView(
        store, toasts, activity_limit=request.app.state.settings.DASHBOARD_ACTIVITY_LIMIT,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(view: DashboardView = Depends(get_dashboard_view)):
    """Department stat tiles plus the newest activities, icons resolved."""
    return await view.load()


# ═════════════════════════════════════════════════════════════════════
# Department stats
# ═════════════════════════════════════════════════════════════════════


@stats_router.get("", response_model=list[DepartmentStatOut])
async def list_department_stats(store: RecordStore = Depends(get_record_store)):
    return (await DepartmentStatsService.list(store, page_size=MAX_PAGE_SIZE)).items


@stats_router.get("/by-title/{title}", response_model=DepartmentStatOut)
async def get_department_stat(title: str, store: RecordStore = Depends(get_record_store)):
    stat = await DepartmentStatsService.get_by_title(store, title)
    if stat is None:
        raise NotFoundException("DepartmentStat", title)
    return stat
