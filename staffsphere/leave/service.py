"""Leave request service: CRUD over ``leave_requests``, employee expanded."""

from __future__ import annotations

from staffsphere.common.constants import Collection
from staffsphere.common.service import CreatableMixin, ListOutcome, MutableMixin, ReadableMixin
from staffsphere.leave.schemas import LEAVE_REQUEST_FIELDS, LeaveRequestOut
from staffsphere.store.base import Expand, OrderBy, RecordStore


class LeaveRequestService(ReadableMixin, CreatableMixin, MutableMixin):
    collection = Collection.leave_requests.value
    entity_name = "LeaveRequest"
    fields = LEAVE_REQUEST_FIELDS
    writable_fields = LEAVE_REQUEST_FIELDS
    schema = LeaveRequestOut
    order_by = (OrderBy(field="start_date", descending=True),)
    expands = (Expand(field="employee", alias="employee_details"),)

    @classmethod
    async def list_for_employee(cls, store: RecordStore, employee_id: int) -> ListOutcome:
        return await cls.find_by(store, "employee", employee_id)
