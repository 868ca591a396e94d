"""Record service layer: allow-lists, filtering, ordering, expansion, failures."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from staffsphere.activities.service import ActivityService
from staffsphere.common.constants import TaskPriority
from staffsphere.common.exceptions import NotFoundException, RecordStoreError
from staffsphere.common.service import pick_writable
from staffsphere.dashboard.service import DepartmentStatsService
from staffsphere.employees.service import EmployeeService
from staffsphere.leave.schemas import LeaveRequestCreate
from staffsphere.leave.service import LeaveRequestService
from staffsphere.tasks.schemas import TaskCreate, TaskUpdate
from staffsphere.tasks.service import TaskService
from tests.conftest import (
    _make_employee,
    seed_activity,
    seed_department_stat,
    seed_employee,
)


# ═════════════════════════════════════════════════════════════════════
# ALLOW-LISTS
# ═════════════════════════════════════════════════════════════════════


class TestAllowLists:

    def test_pick_writable_drops_unknown_keys(self):
        picked = pick_writable({"name": "A", "salary": 1, "id": 9}, ("name", "email"))
        assert picked == {"name": "A"}

    def test_pick_writable_serializes_dates_and_enums(self):
        picked = pick_writable(
            {"due_date": date(2024, 6, 1), "priority": TaskPriority.high},
            ("due_date", "priority"),
        )
        assert picked == {"due_date": "2024-06-01", "priority": "high"}

    def test_pick_writable_only_sends_fields_set_on_models(self):
        picked = pick_writable(TaskUpdate(status="completed"), TaskService.writable_fields)
        assert picked == {"status": "completed"}

    async def test_employee_create_drops_foreign_fields(self, store):
        payload = _make_employee(salary=90000, Owner="someone", id=77)

        outcome = await EmployeeService.create(store, payload)

        assert outcome.success
        _, collection, sent = store.calls_for("create")[0]
        assert collection == "employees"
        assert "salary" not in sent and "Owner" not in sent and "id" not in sent
        assert set(sent) <= set(EmployeeService.writable_fields)

    async def test_employee_update_drops_foreign_fields(self, store, sql_store):
        employee_id = await seed_employee(sql_store)

        await EmployeeService.update(store, employee_id, {"position": "Lead", "password": "x"})

        _, _, sent = store.calls_for("update")[0]
        assert sent == {"id": employee_id, "position": "Lead"}
        assert (await EmployeeService.get(store, employee_id)).position == "Lead"

    async def test_task_create_from_schema(self, store, sql_store):
        employee_id = await seed_employee(sql_store)
        body = TaskCreate(description="Prepare onboarding", priority="high", assigned_to=employee_id)

        outcome = await TaskService.create(store, body.model_dump())

        task = await TaskService.get(store, outcome.created_id)
        assert task.priority is TaskPriority.high
        assert task.employee.id == employee_id


# ═════════════════════════════════════════════════════════════════════
# LIST / GET
# ═════════════════════════════════════════════════════════════════════


class TestListing:

    async def test_contains_filter_is_case_insensitive(self, store, sql_store):
        await seed_employee(sql_store, name="Alex", department="Engineering")
        await seed_employee(sql_store, name="Sarah", department="Finance")

        outcome = await EmployeeService.list(store, {"department": "engin"})

        assert outcome.success
        assert [e.name for e in outcome.items] == ["Alex"]
        assert outcome.total == 1

    async def test_blank_filters_are_ignored(self, store, sql_store):
        await seed_employee(sql_store)
        outcome = await EmployeeService.list(store, {"name": "", "department": None})
        assert outcome.total == 1

    async def test_paging(self, store, sql_store):
        for i in range(5):
            await seed_employee(sql_store, name=f"Employee {i}")

        outcome = await EmployeeService.list(store, page=2, page_size=2)

        assert [e.name for e in outcome.items] == ["Employee 2", "Employee 3"]
        assert outcome.total == 5

    async def test_get_missing_raises(self, store):
        with pytest.raises(NotFoundException):
            await EmployeeService.get(store, 404)

    async def test_store_failure_is_reraised(self, store):
        store.fail("list")
        with pytest.raises(RecordStoreError):
            await EmployeeService.list(store)

    async def test_tasks_for_employee(self, store, sql_store):
        alex = await seed_employee(sql_store, name="Alex")
        sarah = await seed_employee(sql_store, name="Sarah")
        await TaskService.create(store, {"description": "A", "assigned_to": alex})
        await TaskService.create(store, {"description": "B", "assigned_to": sarah})

        outcome = await TaskService.list_for_employee(store, alex)

        assert [t.description for t in outcome.items] == ["A"]


# ═════════════════════════════════════════════════════════════════════
# LEAVE REQUESTS
# ═════════════════════════════════════════════════════════════════════


class TestLeaveRequests:

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            LeaveRequestCreate(
                start_date=date(2024, 6, 10), end_date=date(2024, 6, 5), reason="Trip",
            )

    def test_same_day_is_allowed(self):
        body = LeaveRequestCreate(
            start_date=date(2024, 6, 10), end_date=date(2024, 6, 10), reason="Appointment",
        )
        assert body.end_date == body.start_date

    async def test_create_and_expand_employee(self, store, sql_store):
        employee_id = await seed_employee(sql_store, name="Emma")
        body = LeaveRequestCreate(
            leave_type="sick",
            start_date=date(2024, 6, 3),
            end_date=date(2024, 6, 4),
            reason="Flu",
            employee=employee_id,
        )
        await LeaveRequestService.create(store, body.model_dump())

        outcome = await LeaveRequestService.list_for_employee(store, employee_id)

        assert len(outcome.items) == 1
        assert outcome.items[0].employee_details.name == "Emma"


# ═════════════════════════════════════════════════════════════════════
# ACTIVITIES + DEPARTMENT STATS
# ═════════════════════════════════════════════════════════════════════


class TestActivities:

    def test_append_only(self):
        assert not hasattr(ActivityService, "update")
        assert not hasattr(ActivityService, "delete")

    async def test_create_stamps_time(self, store):
        await ActivityService.create(store, {"action": "joined the team", "time": None})

        _, _, sent = store.calls_for("create")[0]
        assert datetime.fromisoformat(sent["time"]).tzinfo is not None

    async def test_create_keeps_given_time(self, store):
        await ActivityService.create(store, {"action": "x", "time": "2024-01-01T08:00:00+00:00"})
        _, _, sent = store.calls_for("create")[0]
        assert sent["time"] == "2024-01-01T08:00:00+00:00"

    async def test_newest_first_with_actor_name(self, store, sql_store):
        alex = await seed_employee(sql_store, name="Alex Morgan")
        await seed_activity(sql_store, action="older", time="2024-06-01T08:00:00+00:00", user=alex)
        await seed_activity(sql_store, action="newer", time="2024-06-02T08:00:00+00:00", user=alex)

        outcome = await ActivityService.list(store)

        assert [a.action for a in outcome.items] == ["newer", "older"]
        assert outcome.items[0].actor_name == "Alex Morgan"

    async def test_actor_name_missing_without_user(self, store, sql_store):
        await seed_activity(sql_store)
        outcome = await ActivityService.recent(store, 5)
        assert outcome.items[0].actor_name is None


class TestDepartmentStats:

    def test_read_only(self):
        assert not hasattr(DepartmentStatsService, "create")
        assert not hasattr(DepartmentStatsService, "update")
        assert not hasattr(DepartmentStatsService, "delete")

    async def test_get_by_title_is_exact(self, store, sql_store):
        await seed_department_stat(sql_store, title="Total Employees")

        assert await DepartmentStatsService.get_by_title(store, "Total") is None
        stat = await DepartmentStatsService.get_by_title(store, "Total Employees")
        assert stat.value == 42
