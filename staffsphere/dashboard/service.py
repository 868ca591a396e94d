"""Department stats service: read-only summary tiles."""

from __future__ import annotations

from typing import Optional

from staffsphere.common.constants import Collection
from staffsphere.common.service import ReadableMixin
from staffsphere.dashboard.schemas import DEPARTMENT_STAT_FIELDS, DepartmentStatOut
from staffsphere.store.base import RecordStore


class DepartmentStatsService(ReadableMixin):
    collection = Collection.department_stats.value
    entity_name = "DepartmentStat"
    fields = DEPARTMENT_STAT_FIELDS
    schema = DepartmentStatOut

    @classmethod
    async def get_by_title(cls, store: RecordStore, title: str) -> Optional[DepartmentStatOut]:
        """Exact title match; ``None`` when no tile has that title."""
        outcome = await cls.find_by(store, "title", title)
        return outcome.items[0] if outcome.items else None
