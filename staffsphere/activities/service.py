"""Activity service: append-only feed, newest first.

Activities are never updated or deleted, so the service only reads and
creates. ``create`` stamps the current UTC time when none is given.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from staffsphere.activities.schemas import ACTIVITY_FIELDS, ActivityOut
from staffsphere.common.constants import Collection
from staffsphere.common.service import CreatableMixin, ListOutcome, ReadableMixin
from staffsphere.store.base import Expand, OrderBy, RecordStore


class ActivityService(ReadableMixin, CreatableMixin):
    collection = Collection.activities.value
    entity_name = "Activity"
    fields = ACTIVITY_FIELDS
    writable_fields = ACTIVITY_FIELDS
    schema = ActivityOut
    order_by = (OrderBy(field="time", descending=True),)
    expands = (Expand(field="user", alias="user_details"),)

    @classmethod
    def prepare_create(cls, fields: dict[str, Any]) -> dict[str, Any]:
        if not fields.get("time"):
            fields["time"] = datetime.now(timezone.utc).isoformat()
        return fields

    @classmethod
    async def recent(cls, store: RecordStore, limit: int) -> ListOutcome:
        return await cls.list(store, page=1, page_size=limit)
