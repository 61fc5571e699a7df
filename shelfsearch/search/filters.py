"""Browse-page filtering and ordering on top of relevance search."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from .ranker import Ranker, ScoredResult, field_value, ranker as default_ranker

T = TypeVar("T")

ALL_DEPARTMENTS = "All Departments"
ALL_YEARS = "All Years"
ALL_TYPES = "all"


class SortKey(str, Enum):
    """Orderings offered by the browse pages."""

    RELEVANCE = "relevance"
    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"
    TITLE = "title"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Return True if *value* matches one of the enum members."""

        try:
            cls(value)
        except ValueError:
            return False
        return True


@dataclass
class BrowseFilters:
    search_query: str = ""
    department: str = ALL_DEPARTMENTS
    year: str = ALL_YEARS
    type: Optional[str] = None
    sort_by: str = SortKey.RELEVANCE.value


def _year(record: Any) -> int:
    return int(field_value(record, "year") or 0)


def _downloads(record: Any) -> int:
    return int(field_value(record, "downloads") or 0)


def _title(record: Any) -> str:
    return str(field_value(record, "title") or "").casefold()


# (key function, descending)
_SORTS: dict[SortKey, tuple[Callable[[Any], Any], bool]] = {
    SortKey.NEWEST: (_year, True),
    SortKey.OLDEST: (_year, False),
    SortKey.POPULAR: (_downloads, True),
    SortKey.TITLE: (_title, False),
}


def _matches(record: Any, filters: BrowseFilters) -> bool:
    # Only the sentinels disable department and year; "" is a real value.
    department = filters.department
    if department != ALL_DEPARTMENTS:
        if field_value(record, "department") != department:
            return False

    year = filters.year
    if year != ALL_YEARS:
        if str(field_value(record, "year")) != str(year):
            return False

    kind = filters.type
    if kind and kind != ALL_TYPES:
        if field_value(record, "type") != kind:
            return False

    return True


def _order(results: List[ScoredResult[T]], sort_by: str) -> List[ScoredResult[T]]:
    if not SortKey.has_value(sort_by):
        return results
    key = SortKey(sort_by)
    if key is SortKey.RELEVANCE:
        return results

    # Input is already in descending score order (or input order for a blank
    # query), so a stable sort leaves relevance as the tiebreaker.
    key_fn, descending = _SORTS[key]
    return sorted(results, key=lambda r: key_fn(r.item), reverse=descending)


def filter_and_sort(
    records: Sequence[T],
    filters: BrowseFilters,
    *,
    ranker: Optional[Ranker] = None,
) -> List[T]:
    """Search, apply equality filters, then order for display."""
    r = ranker or default_ranker
    scored = r.search(records, filters.search_query or "")
    kept = [s for s in scored if _matches(s.item, filters)]
    ordered = _order(kept, filters.sort_by or SortKey.RELEVANCE.value)
    return [s.item for s in ordered]
