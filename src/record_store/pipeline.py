"""Search, sort and paginate pipeline over in-memory records."""

import re
from typing import Any, List, Optional, Tuple, Union

from record_store.exceptions import ValidationError
from record_store.models.query import Page, RecordQuery, SortOrder
from record_store.models.record import Record

_DIGITS = re.compile(r"(\d+)")


def _natural_key(value: Any) -> Tuple[Union[str, int], ...]:
    """Case-insensitive key where digit runs compare numerically ("9" < "10").

    Splitting on digit runs always yields text at even positions and numbers at odd
    positions, so two keys never compare a str against an int.
    """
    parts = _DIGITS.split(str(value).lower())
    return tuple(int(part) if index % 2 else part for index, part in enumerate(parts))


def _to_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name} parameter: {value!r}")


def search(records: List[Record], keyword: Optional[str]) -> List[Record]:
    """Keep records where any field contains the keyword, ignoring case."""
    if not keyword:
        return records
    needle = keyword.lower()
    return [record for record in records if any(needle in str(value).lower() for value in record.values())]


def sort(records: List[Record], key: Optional[str], order: Optional[str]) -> List[Record]:
    """Sort records on one field using natural ordering.

    Returns the input unchanged when key or order is empty. An order other than
    ``asc``/``desc`` yields a copy in the original order.
    """
    if not key or not order:
        return records
    if order == SortOrder.ASC.value:
        return sorted(records, key=lambda record: _natural_key(record.get(key) or ""))
    if order == SortOrder.DESC.value:
        return sorted(records, key=lambda record: _natural_key(record.get(key) or ""), reverse=True)
    return list(records)


def paginate(records: List[Record], page: Any = 1, limit: Any = 10) -> Page:
    """Slice one page out of the records.

    ``page`` and ``limit`` are coerced to integers and clamped to at least 1.
    ``total`` is the length of the input list.

    Raises:
        ValidationError: If page or limit is not an integer
    """
    page = max(_to_int(page, "page"), 1)
    limit = max(_to_int(limit, "limit"), 1)
    start = (page - 1) * limit
    return Page(items=records[start : start + limit], total=len(records), page=page, limit=limit)


def run_query(records: List[Record], query: RecordQuery) -> Page:
    """Apply search, then sort, then pagination."""
    filtered = search(records, query.keyword)
    filtered = sort(filtered, query.sort_key, query.sort_order)
    return paginate(filtered, query.page, query.limit)
