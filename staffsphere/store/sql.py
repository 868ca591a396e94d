"""SQL record store: RecordStore adapter over async SQLAlchemy tables."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from staffsphere.common.exceptions import NotFoundException, RecordStoreError
from staffsphere.common.filters import apply_filters, apply_sorting
from staffsphere.common.pagination import fetch_page
from staffsphere.store.base import Condition, Expand, ListQuery, ListResult, Operator, RecordStore
from staffsphere.store.models import COLLECTION_MODELS, RELATIONS

logger = logging.getLogger(__name__)


class SqlRecordStore(RecordStore):
    """Stores each collection in its own table; one session per call."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    # ── RecordStore ────────────────────────────────────────────────

    async def list(self, collection: str, query: ListQuery) -> ListResult:
        model = _model_for(collection)

        stmt = select(model)
        stmt = apply_filters(stmt, model, _where_to_filters(model, query.where))
        for order in query.order_by:
            stmt = apply_sorting(stmt, model, f"-{order.field}" if order.descending else order.field)
        stmt = stmt.order_by(model.id.asc())

        try:
            async with self._session_factory() as session:
                rows, total = await fetch_page(
                    session, stmt, offset=query.offset, limit=query.limit,
                )
                records = [_to_record(row, query.fields) for row in rows]
                for expand in query.expands:
                    await _expand(session, collection, records, expand)
        except SQLAlchemyError as exc:
            logger.error("list %s failed: %s", collection, exc)
            raise RecordStoreError(f"Could not fetch {collection}.") from exc

        return ListResult(records=records, total=total)

    async def create(self, collection: str, fields: dict[str, Any]) -> int:
        model = _model_for(collection)
        record = model(**{name: _coerce(model, name, value) for name, value in fields.items()})
        try:
            async with self._session_factory() as session:
                session.add(record)
                await session.commit()
                return record.id
        except SQLAlchemyError as exc:
            logger.error("create %s failed: %s", collection, exc)
            raise RecordStoreError(f"Could not create {collection} record.") from exc

    async def update(self, collection: str, record_id: int, fields: dict[str, Any]) -> None:
        model = _model_for(collection)
        values = {name: _coerce(model, name, value) for name, value in fields.items()}
        try:
            async with self._session_factory() as session:
                record = await session.get(model, record_id)
                if record is None:
                    raise NotFoundException(collection, record_id)
                for name, value in values.items():
                    setattr(record, name, value)
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("update %s/%s failed: %s", collection, record_id, exc)
            raise RecordStoreError(f"Could not update {collection} record {record_id}.") from exc

    async def delete(self, collection: str, record_ids: list[int]) -> None:
        model = _model_for(collection)
        try:
            async with self._session_factory() as session:
                for record_id in record_ids:
                    record = await session.get(model, record_id)
                    if record is None:
                        raise NotFoundException(collection, record_id)
                    await session.delete(record)
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("delete %s %s failed: %s", collection, record_ids, exc)
            raise RecordStoreError(f"Could not delete {collection} records.") from exc


# ── Internal helpers ────────────────────────────────────────────────

def _model_for(collection: str) -> Any:
    try:
        return COLLECTION_MODELS[collection]
    except KeyError:
        raise RecordStoreError(f"Unknown collection '{collection}'.") from None


def _columns(model: Any) -> dict[str, Any]:
    return {column.key: column for column in model.__table__.columns}


def _coerce(model: Any, name: str, value: Any) -> Any:
    """Convert wire values (ISO strings, numeric strings) to column types."""
    column = _columns(model).get(name)
    if column is None:
        raise RecordStoreError(f"Unknown field '{name}' on {model.__tablename__}.")
    if value is None or not isinstance(value, str):
        return value

    python_type = column.type.python_type
    try:
        if python_type is datetime:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        if python_type is date:
            return date.fromisoformat(value[:10])
        if python_type is int:
            return int(value)
    except ValueError:
        raise RecordStoreError(f"Invalid value for '{name}': {value!r}.") from None
    return value


def _where_to_filters(model: Any, where: list[Condition]) -> dict[str, Any]:
    filters: dict[str, Any] = {}
    for condition in where:
        if not condition.values:
            continue
        if condition.operator is Operator.contains:
            filters[f"{condition.field}__ilike"] = [str(v) for v in condition.values]
        elif len(condition.values) == 1:
            filters[condition.field] = _coerce(model, condition.field, condition.values[0])
        else:
            filters[f"{condition.field}__in"] = [
                _coerce(model, condition.field, v) for v in condition.values
            ]
    return filters


def _serialize(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _to_record(row: Any, fields: list[str]) -> dict[str, Any]:
    names = fields or [name for name in _columns(row).keys() if name != "id"]
    record = {"id": row.id}
    for name in names:
        record[name] = _serialize(getattr(row, name, None))
    return record


async def _expand(
    session: AsyncSession,
    collection: str,
    records: list[dict[str, Any]],
    expand: Expand,
) -> None:
    """Attach the referenced record of *expand.field* under *expand.alias*."""
    target = RELATIONS.get(collection, {}).get(expand.field)
    if target is None:
        raise RecordStoreError(f"'{expand.field}' on {collection} is not a relation.")

    ids = {record[expand.field] for record in records if record.get(expand.field) is not None}
    related: dict[int, dict[str, Any]] = {}
    if ids:
        target_model = COLLECTION_MODELS[target]
        rows = (
            await session.execute(select(target_model).where(target_model.id.in_(ids)))
        ).scalars().all()
        related = {row.id: _to_record(row, []) for row in rows}

    for record in records:
        record[expand.alias] = related.get(record.get(expand.field))
