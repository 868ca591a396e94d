"""Record service base classes: pass-through CRUD over one collection.

Each entity service declares its collection, readable fields and writable
allow-list; the mixins below supply ``list`` / ``create`` / ``update`` /
``delete`` as class-level async methods taking the ``RecordStore`` first,
following the project convention of stateless services.

Writes drop every key outside the allow-list before the store is called.
Failures are logged and re-raised untouched; nothing is retried.
"""

from __future__ import annotations

import enum
import logging
from datetime import date, datetime
from typing import Any, ClassVar, Mapping, Optional, Union

from pydantic import BaseModel

from staffsphere.common.constants import DEFAULT_PAGE_SIZE
from staffsphere.common.exceptions import AppException, NotFoundException
from staffsphere.common.pagination import PaginatedResponse, build_meta
from staffsphere.store.base import Condition, Expand, ListQuery, Operator, OrderBy, RecordStore

logger = logging.getLogger(__name__)


# ── Outcomes ────────────────────────────────────────────────────────

class ListOutcome(BaseModel):
    items: list[Any]
    success: bool = True
    total: int = 0

    def to_page(self, page: int, page_size: int) -> PaginatedResponse:
        """Wrap the items in the standard ``{data, meta}`` envelope."""
        return PaginatedResponse(data=self.items, meta=build_meta(page, page_size, self.total))


class CreateOutcome(BaseModel):
    success: bool = True
    created_id: Optional[int] = None


class MutationOutcome(BaseModel):
    success: bool = True


# ── Allow-list ──────────────────────────────────────────────────────

def pick_writable(
    data: Union[Mapping[str, Any], BaseModel],
    writable_fields: tuple[str, ...],
) -> dict[str, Any]:
    """Keep only allow-listed keys that are present in *data*."""
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    picked: dict[str, Any] = {}
    for name in writable_fields:
        if name in data:
            value = data[name]
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            elif isinstance(value, enum.Enum):
                value = value.value
            picked[name] = value
    return picked


# ── Base + mixins ───────────────────────────────────────────────────

class RecordService:
    """Collection metadata shared by the CRUD mixins."""

    collection: ClassVar[str]
    entity_name: ClassVar[str]
    fields: ClassVar[tuple[str, ...]]
    writable_fields: ClassVar[tuple[str, ...]] = ()
    schema: ClassVar[type[BaseModel]]
    order_by: ClassVar[tuple[OrderBy, ...]] = ()
    expands: ClassVar[tuple[Expand, ...]] = ()


class ReadableMixin(RecordService):

    @classmethod
    async def list(
        cls,
        store: RecordStore,
        filters: Optional[Mapping[str, Any]] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ListOutcome:
        """Fetch one page; each filter is a substring match on its field."""
        where = [
            Condition(field=name, operator=Operator.contains, values=[value])
            for name, value in (filters or {}).items()
            if value not in (None, "")
        ]
        return await cls._fetch(
            store, where, offset=(page - 1) * page_size, limit=page_size,
        )

    @classmethod
    async def _fetch(
        cls,
        store: RecordStore,
        where: list[Condition],
        *,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> ListOutcome:
        query = ListQuery(
            fields=list(cls.fields),
            where=where,
            order_by=list(cls.order_by),
            expands=list(cls.expands),
            limit=limit,
            offset=offset,
        )
        try:
            result = await store.list(cls.collection, query)
        except AppException as exc:
            logger.error("Error fetching %s: %s", cls.entity_name, exc.detail)
            raise
        return ListOutcome(
            items=[cls.schema.model_validate(record) for record in result.records],
            total=result.total,
        )

    @classmethod
    async def get(cls, store: RecordStore, record_id: int) -> Any:
        """Fetch a single record by id or raise ``NotFoundException``."""
        outcome = await cls._fetch(
            store,
            [Condition(field="id", operator=Operator.exact_match, values=[record_id])],
            limit=1,
        )
        if not outcome.items:
            raise NotFoundException(cls.entity_name, record_id)
        return outcome.items[0]

    @classmethod
    async def find_by(cls, store: RecordStore, field: str, value: Any) -> ListOutcome:
        """Every record whose *field* equals *value* exactly."""
        return await cls._fetch(
            store,
            [Condition(field=field, operator=Operator.exact_match, values=[value])],
        )


class CreatableMixin(RecordService):

    @classmethod
    async def create(
        cls,
        store: RecordStore,
        data: Union[Mapping[str, Any], BaseModel],
    ) -> CreateOutcome:
        fields = cls.prepare_create(pick_writable(data, cls.writable_fields))
        try:
            created_id = await store.create(cls.collection, fields)
        except AppException as exc:
            logger.error("Error creating %s: %s", cls.entity_name, exc.detail)
            raise
        logger.info("Created %s %s", cls.entity_name, created_id)
        return CreateOutcome(created_id=created_id)

    @classmethod
    def prepare_create(cls, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook for defaults stamped onto new records."""
        return fields


class MutableMixin(RecordService):

    @classmethod
    async def update(
        cls,
        store: RecordStore,
        record_id: int,
        data: Union[Mapping[str, Any], BaseModel],
    ) -> MutationOutcome:
        fields = pick_writable(data, cls.writable_fields)
        try:
            await store.update(cls.collection, record_id, fields)
        except AppException as exc:
            logger.error("Error updating %s with ID %s: %s", cls.entity_name, record_id, exc.detail)
            raise
        return MutationOutcome()

    @classmethod
    async def delete(cls, store: RecordStore, record_id: int) -> MutationOutcome:
        try:
            await store.delete(cls.collection, [record_id])
        except AppException as exc:
            logger.error("Error deleting %s with ID %s: %s", cls.entity_name, record_id, exc.detail)
            raise
        logger.info("Deleted %s %s", cls.entity_name, record_id)
        return MutationOutcome()
