"""Generic filtering and sorting utilities.

SQL-side helpers work on SQLAlchemy ``Select`` statements; ``filter_records``
is the in-memory counterpart used by list views.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, TypeVar

from sqlalchemy import Select, and_, or_
from sqlalchemy.orm import InstrumentedAttribute

R = TypeVar("R")


# ── Sorting ─────────────────────────────────────────────────────────

def apply_sorting(
    query: Select,
    model: Any,
    sort: Optional[str],
) -> Select:
    """
    Parse a sort string like ``"-time"`` and apply ORDER BY.

    * Leading ``-`` → DESC; otherwise ASC.
    * Unknown columns are ignored.
    """
    if not sort:
        return query

    descending = sort.startswith("-")
    col = _get_column(model, sort.lstrip("-"))
    if col is None:
        return query
    return query.order_by(col.desc() if descending else col.asc())


# ── Generic filtering ──────────────────────────────────────────────

def apply_filters(
    query: Select,
    model: Any,
    filters: dict[str, Any],
) -> Select:
    """
    Apply a dict of filter parameters to a SQLAlchemy ``Select``.

    Key suffixes determine the operator:

    ============  ==================
    Suffix        Operator
    ============  ==================
    (none)        ``==``
    ``__ilike``   case-insensitive LIKE (wraps ``%…%``)
    ``__in``      ``IN (…)``
    ============  ==================

    ``None`` values and unknown columns are silently skipped. A list value
    for ``__ilike`` matches any of its items. ``__ilike`` values match literally:
    ``%`` and ``_`` are not wildcards.
    """
    conditions: list = []

    for key, value in filters.items():
        if value is None:
            continue

        if key.endswith("__ilike"):
            col = _get_column(model, key.removesuffix("__ilike"))
            if col is not None:
                values = value if isinstance(value, (list, tuple)) else [value]
                conditions.append(
                    or_(*(col.ilike(f"%{_escape_like(v)}%", escape="\\") for v in values))
                )

        elif key.endswith("__in"):
            col = _get_column(model, key.removesuffix("__in"))
            if col is not None:
                conditions.append(col.in_(value))

        else:
            col = _get_column(model, key)
            if col is not None:
                conditions.append(col == value)

    if conditions:
        query = query.where(and_(*conditions))

    return query


# ── In-memory search ────────────────────────────────────────────────

def filter_records(
    records: Iterable[R],
    term: Optional[str],
    fields: Sequence[str],
) -> list[R]:
    """Case-insensitive substring match of *term* against any of *fields*.

    Works on objects and mappings alike; missing or ``None`` fields never
    match. A blank term keeps every record.
    """
    needle = (term or "").lower()
    if not needle:
        return list(records)

    matched: list[R] = []
    for record in records:
        for name in fields:
            value = record.get(name) if isinstance(record, dict) else getattr(record, name, None)
            if value is not None and needle in str(value).lower():
                matched.append(record)
                break
    return matched


# ── Internal helper ─────────────────────────────────────────────────

def _escape_like(value: Any) -> str:
    """Escape LIKE metacharacters so *value* matches as a plain substring."""
    return str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _get_column(model: Any, name: str) -> Optional[InstrumentedAttribute]:
    """Safely retrieve a mapped column attribute by name."""
    attr = getattr(model, name, None)
    return attr if isinstance(attr, InstrumentedAttribute) else None
