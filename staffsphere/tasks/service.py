"""Task service: CRUD over the ``tasks`` collection, assignee expanded."""

from __future__ import annotations

from staffsphere.common.constants import Collection
from staffsphere.common.service import CreatableMixin, ListOutcome, MutableMixin, ReadableMixin
from staffsphere.store.base import Expand, OrderBy, RecordStore
from staffsphere.tasks.schemas import TASK_FIELDS, TaskOut


class TaskService(ReadableMixin, CreatableMixin, MutableMixin):
    collection = Collection.tasks.value
    entity_name = "Task"
    fields = TASK_FIELDS
    writable_fields = TASK_FIELDS
    schema = TaskOut
    order_by = (OrderBy(field="due_date"),)
    expands = (Expand(field="assigned_to", alias="employee"),)

    @classmethod
    async def list_for_employee(cls, store: RecordStore, employee_id: int) -> ListOutcome:
        return await cls.find_by(store, "assigned_to", employee_id)
