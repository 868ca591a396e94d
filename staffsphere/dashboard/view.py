"""Dashboard page controller: department stat tiles and the activity feed."""

from __future__ import annotations

import logging
from typing import Optional, Union

from staffsphere.activities.schemas import ActivityCreate, ActivityOut
from staffsphere.activities.service import ActivityService
from staffsphere.common.constants import MAX_PAGE_SIZE, ActivityStatus
from staffsphere.common.exceptions import AppException
from staffsphere.common.icons import Icon, get_icon
from staffsphere.common.service import CreateOutcome
from staffsphere.dashboard.schemas import (
    ActivityFeedItem,
    DashboardResponse,
    DepartmentStatOut,
    StatCard,
)
from staffsphere.dashboard.service import DepartmentStatsService
from staffsphere.notifications.service import ToastQueue
from staffsphere.store.base import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_STAT_ICON = "users"
DEFAULT_ACTIVITY_ICON = "clock"
DEFAULT_BADGE = "badge-info"

_ACTIVITY_ICONS = {
    ActivityStatus.pending: "clock",
    ActivityStatus.completed: "trending-up",
    ActivityStatus.critical: "alert-circle",
}

_STATUS_BADGES = {
    ActivityStatus.pending: "badge-warning",
    ActivityStatus.completed: "badge-success",
    ActivityStatus.critical: "badge-danger",
}

StatusLike = Union[ActivityStatus, str, None]


def _as_status(status: StatusLike) -> Optional[ActivityStatus]:
    try:
        return ActivityStatus(status) if status is not None else None
    except ValueError:
        return None


def stat_icon(name: Optional[str]) -> Icon:
    return get_icon(name or DEFAULT_STAT_ICON)


def activity_icon(status: StatusLike) -> Icon:
    return get_icon(_ACTIVITY_ICONS.get(_as_status(status), DEFAULT_ACTIVITY_ICON))


def status_badge(status: StatusLike) -> str:
    return _STATUS_BADGES.get(_as_status(status), DEFAULT_BADGE)


class DashboardView:

    def __init__(self, store: RecordStore, toasts: ToastQueue, *, activity_limit: int = 10) -> None:
        self.store = store
        self._toasts = toasts
        self.activity_limit = activity_limit
        self.stats: list[DepartmentStatOut] = []
        self.activities: list[ActivityOut] = []
        self.is_loading = False

    async def load(self) -> DashboardResponse:
        self.is_loading = True
        try:
            stats = await DepartmentStatsService.list(self.store, page_size=MAX_PAGE_SIZE)
            activities = await ActivityService.recent(self.store, self.activity_limit)
        except AppException:
            self._toasts.error("Failed to load dashboard data.")
            raise
        finally:
            self.is_loading = False
        self.stats = stats.items
        self.activities = activities.items
        return self.render()

    async def add_activity(self, activity: ActivityCreate) -> CreateOutcome:
        """Append an activity reported by a child form and refresh the feed."""
        outcome = await ActivityService.create(self.store, activity.model_dump())
        self.activities = (await ActivityService.recent(self.store, self.activity_limit)).items
        return outcome

    def render(self) -> DashboardResponse:
        return DashboardResponse(
            stats=[
                StatCard(**stat.model_dump(), glyph=stat_icon(stat.icon))
                for stat in self.stats
            ],
            activities=[
                ActivityFeedItem(
                    **activity.model_dump(exclude={"actor_name"}),
                    glyph=activity_icon(activity.status),
                    badge=status_badge(activity.status),
                )
                for activity in self.activities
            ],
        )
