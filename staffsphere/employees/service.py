"""Employee service: CRUD over the ``employees`` collection."""

from __future__ import annotations

from staffsphere.common.constants import Collection
from staffsphere.common.service import CreatableMixin, MutableMixin, ReadableMixin
from staffsphere.employees.schemas import EMPLOYEE_FIELDS, EmployeeOut
from staffsphere.store.base import OrderBy


class EmployeeService(ReadableMixin, CreatableMixin, MutableMixin):
    collection = Collection.employees.value
    entity_name = "Employee"
    fields = EMPLOYEE_FIELDS
    writable_fields = EMPLOYEE_FIELDS
    schema = EmployeeOut
    order_by = (OrderBy(field="name"),)
