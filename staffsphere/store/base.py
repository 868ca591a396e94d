"""RecordStore interface: the contract every backend adapter implements.

A record is a plain dict keyed by collection field names plus ``id``.
Relation expansions appear under their alias as a nested record dict.
"""

from __future__ import annotations

import abc
import enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Operator(str, enum.Enum):
    contains = "Contains"
    exact_match = "ExactMatch"


class Condition(BaseModel):
    """Single where-clause on one field."""

    field: str
    operator: Operator = Operator.contains
    values: list[Any]


class OrderBy(BaseModel):
    field: str
    descending: bool = False


class Expand(BaseModel):
    """Inline the record referenced by *field* under *alias*."""

    field: str
    alias: str


class ListQuery(BaseModel):
    """Projection, filtering, ordering, paging and expansion for ``list``."""

    fields: list[str] = Field(default_factory=list)
    where: list[Condition] = Field(default_factory=list)
    order_by: list[OrderBy] = Field(default_factory=list)
    expands: list[Expand] = Field(default_factory=list)
    limit: Optional[int] = None
    offset: int = 0


class ListResult(BaseModel):
    records: list[dict[str, Any]]
    total: int


class RecordStore(abc.ABC):
    """Remote record storage addressed by collection name.

    Failures surface as ``RecordStoreError`` (or ``NotFoundException`` for a
    missing id); adapters never retry.
    """

    @abc.abstractmethod
    async def list(self, collection: str, query: ListQuery) -> ListResult:
        """Fetch records matching *query*."""

    @abc.abstractmethod
    async def create(self, collection: str, fields: dict[str, Any]) -> int:
        """Insert one record and return its id."""

    @abc.abstractmethod
    async def update(self, collection: str, record_id: int, fields: dict[str, Any]) -> None:
        """Overwrite *fields* on the record with *record_id*."""

    @abc.abstractmethod
    async def delete(self, collection: str, record_ids: list[int]) -> None:
        """Remove every record in *record_ids*."""

    async def close(self) -> None:
        """Release connections held by the adapter."""
        return None
