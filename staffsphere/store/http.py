"""HTTP record store: RecordStore adapter for the hosted record API.

Wire format (per collection ``{base}/projects/{project}/tables/{collection}``):

    POST   /records/fetch   {fields, where, orderBy, pagingInfo, expands}
    POST   /records         {records: [...]}
    PATCH  /records         {records: [{Id, ...}]}
    DELETE /records         {RecordIds: [...]}

Every response carries ``success``; per-record operations also return a
``results`` list whose entries carry their own ``success`` / ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from staffsphere.common.exceptions import RecordStoreError
from staffsphere.store.base import ListQuery, ListResult, RecordStore

logger = logging.getLogger(__name__)


class HttpRecordStore(RecordStore):
    """Talks to the hosted record API with one pooled ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        public_key: str,
        *,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.project_id = project_id
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {public_key}",
                "X-Project-Id": project_id,
            },
        )

    # ── RecordStore ────────────────────────────────────────────────

    async def list(self, collection: str, query: ListQuery) -> ListResult:
        body = await self._call("POST", collection, "/records/fetch", _fetch_params(query))
        records = [_normalize(record) for record in body.get("data") or []]
        total = body.get("total")
        return ListResult(records=records, total=total if total is not None else len(records))

    async def create(self, collection: str, fields: dict[str, Any]) -> int:
        body = await self._call("POST", collection, "/records", {"records": [fields]})
        result = _first_result(body, collection)
        record = result.get("data") or {}
        record_id = record.get("Id", record.get("id"))
        if record_id is None:
            raise RecordStoreError(f"Record store returned no id for new {collection} record.")
        return int(record_id)

    async def update(self, collection: str, record_id: int, fields: dict[str, Any]) -> None:
        body = await self._call(
            "PATCH", collection, "/records", {"records": [{"Id": record_id, **fields}]},
        )
        _first_result(body, collection)

    async def delete(self, collection: str, record_ids: list[int]) -> None:
        body = await self._call("DELETE", collection, "/records", {"RecordIds": record_ids})
        for result in body.get("results") or []:
            if not result.get("success", False):
                raise RecordStoreError(result.get("message") or f"Could not delete {collection} records.")

    async def close(self) -> None:
        await self._client.aclose()

    # ── Transport ──────────────────────────────────────────────────

    async def _call(
        self,
        method: str,
        collection: str,
        suffix: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        url = f"/projects/{self.project_id}/tables/{collection}{suffix}"
        try:
            response = await self._client.request(method, url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("%s %s → HTTP %s", method, url, exc.response.status_code)
            raise RecordStoreError(
                f"Record store answered HTTP {exc.response.status_code} for {collection}.",
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise RecordStoreError(f"Record store unreachable: {exc}") from exc
        except ValueError as exc:
            raise RecordStoreError(f"Record store sent malformed JSON for {collection}.") from exc

        if not body.get("success", False):
            message = body.get("message") or f"Record store rejected the {collection} request."
            logger.error("%s %s rejected: %s", method, url, message)
            raise RecordStoreError(message)
        return body


# ── Internal helpers ────────────────────────────────────────────────

def _fetch_params(query: ListQuery) -> dict[str, Any]:
    params: dict[str, Any] = {"fields": query.fields}
    if query.where:
        params["where"] = [
            {
                "fieldName": "Id" if c.field == "id" else c.field,
                "operator": c.operator.value,
                "values": c.values,
            }
            for c in query.where
        ]
    if query.order_by:
        params["orderBy"] = [
            {"field": o.field, "direction": "desc" if o.descending else "asc"}
            for o in query.order_by
        ]
    if query.limit is not None:
        params["pagingInfo"] = {"limit": query.limit, "offset": query.offset}
    if query.expands:
        params["expands"] = [{"name": e.field, "alias": e.alias} for e in query.expands]
    return params


def _normalize(record: dict[str, Any]) -> dict[str, Any]:
    """Rename the API's ``Id`` key to ``id`` (recursively for expansions)."""
    normalized: dict[str, Any] = {}
    for key, value in record.items():
        if key == "Id":
            key = "id"
        normalized[key] = _normalize(value) if isinstance(value, dict) else value
    return normalized


def _first_result(body: dict[str, Any], collection: str) -> dict[str, Any]:
    results = body.get("results") or []
    if not results:
        raise RecordStoreError(f"Record store returned no results for {collection}.")
    result = results[0]
    if not result.get("success", False):
        raise RecordStoreError(result.get("message") or f"Record store rejected the {collection} record.")
    return result
