from .matcher import match_score
from .ranker import FieldWeight, Ranker, ScoredResult, search
from .filters import BrowseFilters, SortKey, filter_and_sort
from ..config import search_settings, SearchSettings

__all__ = [
    "match_score",
    "FieldWeight",
    "Ranker",
    "ScoredResult",
    "search",
    "BrowseFilters",
    "SortKey",
    "filter_and_sort",
    "search_settings",
    "SearchSettings",
]
