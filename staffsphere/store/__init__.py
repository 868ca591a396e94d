"""Record store: backend-agnostic record access for the service layer."""

from sqlalchemy.ext.asyncio import async_sessionmaker

from staffsphere.config import Settings
from staffsphere.store.base import (
    Condition,
    Expand,
    ListQuery,
    ListResult,
    Operator,
    OrderBy,
    RecordStore,
)
from staffsphere.store.http import HttpRecordStore
from staffsphere.store.sql import SqlRecordStore


def build_record_store(config: Settings, session_factory: async_sessionmaker) -> RecordStore:
    """Instantiate the adapter selected by ``RECORD_STORE_BACKEND``."""
    if config.RECORD_STORE_BACKEND == "http":
        return HttpRecordStore(
            config.RECORD_STORE_URL,
            config.RECORD_STORE_PROJECT_ID,
            config.RECORD_STORE_PUBLIC_KEY,
            timeout=config.RECORD_STORE_TIMEOUT_SECONDS,
        )
    return SqlRecordStore(session_factory)


__all__ = [
    "Condition",
    "Expand",
    "HttpRecordStore",
    "ListQuery",
    "ListResult",
    "Operator",
    "OrderBy",
    "RecordStore",
    "SqlRecordStore",
    "build_record_store",
]
