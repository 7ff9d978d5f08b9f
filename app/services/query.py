# app/services/query.py
"""
In-memory search, filter, sort and pagination over normalized entities.

Every list view runs the same pipeline over what a repository returned:

    filter_records -> sort_records -> paginate

Records may be pydantic models (attribute or camelCase alias lookup) or
plain mappings. Nothing here touches the store.
"""
import math
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from app.schemas.common import Page
from app.utils.dates import timestamp_or_epoch

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    key: str
    direction: str = ASC

    def __post_init__(self):
        if self.direction not in (ASC, DESC):
            raise ValueError(f"Invalid sort direction: {self.direction}")


def toggle_sort(current: Optional[SortConfig], key: str) -> SortConfig:
    """Re-selecting the active ascending key flips it to descending; anything else starts ascending."""
    if current is not None and current.key == key and current.direction == ASC:
        return SortConfig(key, DESC)
    return SortConfig(key, ASC)


def field_value(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    if hasattr(record, key):
        return getattr(record, key)
    for name, info in getattr(type(record), "model_fields", {}).items():
        if info.alias == key:
            return getattr(record, name)
    return None


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def _contains(value: Any, needle: str) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, set)):
        return any(_contains(item, needle) for item in value)
    return needle in str(value).lower()


def filter_records(
    records: Iterable[Any],
    search: Optional[str] = None,
    search_fields: Sequence[str] = (),
    filters: Optional[Mapping[str, Any]] = None,
    predicates: Sequence[Callable[[Any], bool]] = (),
) -> List[Any]:
    """Keep records matching the search term AND every non-empty equality filter AND every predicate."""
    needle = (search or "").strip().lower()
    active_filters = {k: v for k, v in (filters or {}).items() if not _is_empty(v)}

    result = []
    for record in records:
        if needle and not any(_contains(field_value(record, f), needle) for f in search_fields):
            continue
        if any(field_value(record, k) != v for k, v in active_filters.items()):
            continue
        if not all(predicate(record) for predicate in predicates):
            continue
        result.append(record)
    return result


def _as_number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def sort_records(
    records: Iterable[Any],
    sort: Optional[SortConfig],
    date_fields: Sequence[str] = (),
    numeric_fields: Sequence[str] = (),
) -> List[Any]:
    """Stable single-key sort. Absent dates sort as the epoch, absent numbers as 0."""
    records = list(records)
    if sort is None:
        return records

    values = [field_value(r, sort.key) for r in records]
    present = [v for v in values if v is not None]
    if sort.key in date_fields:
        keys = [timestamp_or_epoch(v) for v in values]
    elif sort.key in numeric_fields or (present and all(_is_number(v) for v in present)):
        keys = [_as_number(v) for v in values]
    else:
        keys = ["" if v is None else str(v) for v in values]

    order = sorted(range(len(records)), key=lambda i: keys[i], reverse=sort.direction == DESC)
    return [records[i] for i in order]


def paginate(records: Sequence[Any], page: int, page_size: int) -> Page:
    """1-based page slice; pages outside 1..total_pages come back empty."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(records)
    total_pages = math.ceil(total / page_size)
    if page < 1:
        items = []
    else:
        start = (page - 1) * page_size
        items = list(records[start:start + page_size])
    return Page(items=items, page=page, page_size=page_size, total=total, total_pages=total_pages)


@dataclass
class ListQuery:
    search: Optional[str] = None
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: Optional[SortConfig] = None
    page: int = 1
    page_size: int = 5


def run_query(
    records: Iterable[Any],
    query: ListQuery,
    search_fields: Sequence[str] = (),
    date_fields: Sequence[str] = (),
    numeric_fields: Sequence[str] = (),
    predicates: Sequence[Callable[[Any], bool]] = (),
) -> Page:
    filtered = filter_records(records, query.search, search_fields, query.filters, predicates)
    ordered = sort_records(filtered, query.sort, date_fields, numeric_fields)
    return paginate(ordered, query.page, query.page_size)
