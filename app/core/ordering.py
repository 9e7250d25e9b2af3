#app/core/ordering.py
"""
Post-fetch ordering.

Store queries are plain equality filters with no ORDER BY, so every list
the API returns is sorted here. Records missing the sort field sort as
the earliest possible value.
"""

from typing import Any, Iterable, List

from app.core.status import as_utc


def _get(record: Any, key: str) -> Any:
    return record.get(key) if isinstance(record, dict) else getattr(record, key, None)


def sort_value(record: Any, key: str) -> float:
    moment = as_utc(_get(record, key))
    return moment.timestamp() if moment is not None else 0.0


def _tie_value(record: Any, tie_key: str) -> int:
    value = _get(record, tie_key)
    return value if isinstance(value, int) else 0


def sort_records(records: Iterable[Any], key: str, descending: bool = True, tie_key: str = "id") -> List[Any]:
    """
    Sorts records by a timestamp field. Same-second server timestamps fall
    back to ``tie_key``, which must grow with insertion order: the row id
    within one table, the shared history sequence across tables.
    """
    return sorted(
        records,
        key=lambda r: (sort_value(r, key), _tie_value(r, tie_key)),
        reverse=descending,
    )


def newest_first(records: Iterable[Any], key: str = "timestamp", tie_key: str = "id") -> List[Any]:
    return sort_records(records, key, descending=True, tie_key=tie_key)
