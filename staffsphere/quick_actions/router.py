"""Quick-actions router: one-step task / leave submission and the recent feed."""

from fastapi import APIRouter, Depends, Request

from staffsphere.activities.schemas import ActivityOut
from staffsphere.dashboard.router import get_dashboard_view
from staffsphere.dashboard.view import DashboardView
from staffsphere.dependencies import get_record_store, get_toasts, require_session
from staffsphere.notifications.service import ToastQueue
from staffsphere.quick_actions.schemas import QuickActionRequest, QuickActionResult, QuickActionTab
from staffsphere.quick_actions.view import QuickActionForm
from staffsphere.store.base import RecordStore

router = APIRouter(prefix="", tags=["quick-actions"], dependencies=[Depends(require_session)])


def get_quick_action_form(
    request: Request,
    store: RecordStore = Depends(get_record_store),
    toasts: ToastQueue = Depends(get_toasts),
    dashboard: DashboardView = Depends(get_dashboard_view),
) -> QuickActionForm:
    # Activities go through the dashboard so its feed is refreshed in place
    return QuickActionForm(
        store,
        toasts,
        on_activity=dashboard.add_activity,
        recent_limit=request.app.state.settings.DASHBOARD_ACTIVITY_LIMIT,
    )


@router.post("", response_model=QuickActionResult, status_code=201)
async def submit_quick_action(
    body: QuickActionRequest,
    form: QuickActionForm = Depends(get_quick_action_form),
    dashboard: DashboardView = Depends(get_dashboard_view),
):
    """Create the task or leave request, log the matching activity, return the new feed."""
    form.form = body
    result = await form.submit()
    result.feed = dashboard.render().activities
    return result


@router.get("/recent", response_model=list[ActivityOut])
async def recent_activities(form: QuickActionForm = Depends(get_quick_action_form)):
    form.switch_tab(QuickActionTab.recent)
    return await form.load_recent()
