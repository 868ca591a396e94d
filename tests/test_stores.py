"""Record store adapters: SQL (aiosqlite) and HTTP (httpx.MockTransport)."""

from __future__ import annotations

import json

import httpx
import pytest

from staffsphere.common.exceptions import NotFoundException, RecordStoreError
from staffsphere.config import Settings
from staffsphere.store import HttpRecordStore, SqlRecordStore, build_record_store
from staffsphere.store.base import Condition, Expand, ListQuery, Operator, OrderBy
from tests.conftest import _make_employee, seed_employee


# ═════════════════════════════════════════════════════════════════════
# SQL
# ═════════════════════════════════════════════════════════════════════


class TestSqlRecordStore:

    async def test_create_list_projection(self, sql_store):
        record_id = await seed_employee(sql_store, name="Alex")

        result = await sql_store.list("employees", ListQuery(fields=["name", "department"]))

        assert result.total == 1
        assert result.records == [{"id": record_id, "name": "Alex", "department": "Engineering"}]

    async def test_dates_come_back_as_iso_strings(self, sql_store):
        await seed_employee(sql_store, join_date="2022-11-30")
        result = await sql_store.list("employees", ListQuery(fields=["join_date"]))
        assert result.records[0]["join_date"] == "2022-11-30"

    async def test_exact_and_contains(self, sql_store):
        await seed_employee(sql_store, name="Alex", department="Engineering")
        await seed_employee(sql_store, name="Alexandra", department="Finance")

        contains = await sql_store.list(
            "employees",
            ListQuery(where=[Condition(field="name", values=["ALEX"])]),
        )
        exact = await sql_store.list(
            "employees",
            ListQuery(where=[Condition(field="name", operator=Operator.exact_match, values=["Alex"])]),
        )

        assert contains.total == 2
        assert exact.total == 1

    @pytest.mark.parametrize("term", ["%", "_", "0%", "o_b"])
    async def test_contains_treats_wildcards_literally(self, sql_store, term):
        await seed_employee(sql_store, name="Alex")
        await seed_employee(sql_store, name="Bo_b 50%")

        result = await sql_store.list(
            "employees",
            ListQuery(fields=["name"], where=[Condition(field="name", values=[term])]),
        )

        assert [r["name"] for r in result.records] == ["Bo_b 50%"]

    async def test_contains_backslash_is_literal(self, sql_store):
        await seed_employee(sql_store, name="Alex")
        await seed_employee(sql_store, name="R\\D Lead")

        result = await sql_store.list(
            "employees",
            ListQuery(fields=["name"], where=[Condition(field="name", values=["\\"])]),
        )

        assert [r["name"] for r in result.records] == ["R\\D Lead"]

    async def test_order_and_window(self, sql_store):
        for name in ("Cara", "Abe", "Bo"):
            await seed_employee(sql_store, name=name)

        result = await sql_store.list(
            "employees",
            ListQuery(fields=["name"], order_by=[OrderBy(field="name", descending=True)], limit=2),
        )

        assert [r["name"] for r in result.records] == ["Cara", "Bo"]
        assert result.total == 3

    async def test_expand_missing_relation_is_none(self, sql_store):
        await sql_store.create("tasks", {"description": "Orphan", "assigned_to": None})

        result = await sql_store.list(
            "tasks", ListQuery(expands=[Expand(field="assigned_to", alias="employee")]),
        )

        assert result.records[0]["employee"] is None

    async def test_expand_non_relation_fails(self, sql_store):
        with pytest.raises(RecordStoreError):
            await sql_store.list("employees", ListQuery(expands=[Expand(field="name", alias="x")]))

    async def test_update_and_delete(self, sql_store):
        record_id = await seed_employee(sql_store)

        await sql_store.update("employees", record_id, {"status": "on-leave"})
        result = await sql_store.list("employees", ListQuery(fields=["status"]))
        assert result.records[0]["status"] == "on-leave"

        await sql_store.delete("employees", [record_id])
        assert (await sql_store.list("employees", ListQuery())).total == 0

    async def test_missing_records(self, sql_store):
        with pytest.raises(NotFoundException):
            await sql_store.update("employees", 123, {"name": "x"})
        with pytest.raises(NotFoundException):
            await sql_store.delete("employees", [123])

    async def test_unknown_collection_or_field(self, sql_store):
        with pytest.raises(RecordStoreError):
            await sql_store.list("payroll", ListQuery())
        with pytest.raises(RecordStoreError):
            await sql_store.create("employees", _make_employee(salary=1))

    async def test_bad_date_is_rejected(self, sql_store):
        with pytest.raises(RecordStoreError):
            await sql_store.create("employees", _make_employee(join_date="yesterday"))


# ═════════════════════════════════════════════════════════════════════
# HTTP
# ═════════════════════════════════════════════════════════════════════


class _Api:
    """Scripted record API: records requests, replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, **body) -> None:
        self.responses.append(httpx.Response(status_code, json=body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def api() -> _Api:
    return _Api()


@pytest.fixture
async def http_store(api):
    adapter = HttpRecordStore(
        "https://records.example/v1/",
        "proj-1",
        "pk-1",
        transport=httpx.MockTransport(api.handler),
    )
    yield adapter
    await adapter.close()


class TestHttpRecordStore:

    async def test_list_request_shape(self, http_store, api):
        api.reply(success=True, data=[{"Id": 3, "name": "Alex"}], total=9)

        result = await http_store.list(
            "activities",
            ListQuery(
                fields=["action", "time"],
                where=[Condition(field="id", operator=Operator.exact_match, values=[3])],
                order_by=[OrderBy(field="time", descending=True)],
                expands=[Expand(field="user", alias="user_details")],
                limit=10,
                offset=20,
            ),
        )

        request = api.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/projects/proj-1/tables/activities/records/fetch"
        assert request.headers["Authorization"] == "Bearer pk-1"
        assert request.headers["X-Project-Id"] == "proj-1"
        assert api.body() == {
            "fields": ["action", "time"],
            "where": [{"fieldName": "Id", "operator": "ExactMatch", "values": [3]}],
            "orderBy": [{"field": "time", "direction": "desc"}],
            "pagingInfo": {"limit": 10, "offset": 20},
            "expands": [{"name": "user", "alias": "user_details"}],
        }
        assert result.records == [{"id": 3, "name": "Alex"}]
        assert result.total == 9

    async def test_nested_ids_are_normalized(self, http_store, api):
        api.reply(success=True, data=[{"Id": 1, "user_details": {"Id": 5, "name": "Kim"}}])

        result = await http_store.list("activities", ListQuery())

        assert result.records[0]["user_details"] == {"id": 5, "name": "Kim"}
        assert result.total == 1

    async def test_create_returns_new_id(self, http_store, api):
        api.reply(success=True, results=[{"success": True, "data": {"Id": 41}}])

        assert await http_store.create("tasks", {"description": "x"}) == 41
        assert api.body() == {"records": [{"description": "x"}]}

    async def test_update_and_delete_payloads(self, http_store, api):
        api.reply(success=True, results=[{"success": True, "data": {"Id": 4}}])
        api.reply(success=True, results=[{"success": True}])

        await http_store.update("employees", 4, {"status": "active"})
        await http_store.delete("employees", [4, 5])

        assert api.requests[0].method == "PATCH"
        assert api.body(0) == {"records": [{"Id": 4, "status": "active"}]}
        assert api.requests[1].method == "DELETE"
        assert api.body(1) == {"RecordIds": [4, 5]}

    async def test_rejected_call(self, http_store, api):
        api.reply(success=False, message="Table not found")
        with pytest.raises(RecordStoreError, match="Table not found"):
            await http_store.list("employees", ListQuery())

    async def test_rejected_record(self, http_store, api):
        api.reply(success=True, results=[{"success": False, "message": "email is invalid"}])
        with pytest.raises(RecordStoreError, match="email is invalid"):
            await http_store.create("employees", {"email": "x"})

    async def test_http_error_status(self, http_store, api):
        api.reply(500, success=False)
        with pytest.raises(RecordStoreError):
            await http_store.list("employees", ListQuery())

    async def test_unreachable(self):
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        adapter = HttpRecordStore("https://x", "p", "k", transport=httpx.MockTransport(_refuse))
        with pytest.raises(RecordStoreError):
            await adapter.create("tasks", {"description": "x"})
        await adapter.close()


class TestBuildRecordStore:

    def test_backend_selection(self, session_factory):
        sql = Settings(RECORD_STORE_PROJECT_ID="p", RECORD_STORE_PUBLIC_KEY="k", JWT_SECRET="s")
        http = sql.model_copy(update={"RECORD_STORE_BACKEND": "http"})

        assert isinstance(build_record_store(sql, session_factory), SqlRecordStore)
        assert isinstance(build_record_store(http, session_factory), HttpRecordStore)
