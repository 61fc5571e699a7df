from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from .history import HistoryStore
from ..config import SearchSettings, search_settings
from ..safe_json import safe_json_loads_str_list
from ..search.ranker import Ranker, ScoredResult, field_value, ranker as default_ranker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SuggestionState(str, Enum):
    # Query too short: show recent searches.
    RECENT = "recent"
    SUGGESTIONS = "suggestions"
    # Query long enough but nothing scored above the threshold.
    NO_RESULTS = "no_results"


@dataclass
class CommitResult(Generic[T]):
    """What the host should navigate to after a commit."""

    query: str
    record: Optional[T] = None


class AutocompleteSession(Generic[T]):
    """Live suggestions plus recent-search memory for one search box.

    The candidate pool is supplied by the host; recent searches are read
    from ``store`` once on construction and written back on every commit.
    """

    def __init__(
        self,
        records: Sequence[T],
        store: HistoryStore,
        *,
        ranker: Optional[Ranker] = None,
        settings: SearchSettings = search_settings,
    ):
        self.settings = settings
        self.store = store
        self.ranker = ranker or default_ranker
        self._records: List[T] = list(records)[: settings.autocomplete_candidate_limit]
        self.query = ""
        self.suggestions: List[ScoredResult[T]] = []
        self.selected_index = -1
        self.recent_searches: List[str] = self._load_recent()

    # ------------------------------------------------------------------
    # Query handling
    # ------------------------------------------------------------------
    @property
    def records(self) -> List[T]:
        return list(self._records)

    def _query_is_live(self) -> bool:
        return len(self.query.strip()) >= self.settings.autocomplete_min_query_length

    def set_query(self, text: str) -> List[ScoredResult[T]]:
        self.query = text or ""
        self.selected_index = -1
        self._refresh()
        return self.suggestions

    def replace_records(self, records: Sequence[T]) -> None:
        self._records = list(records)[: self.settings.autocomplete_candidate_limit]
        self._refresh()

    def _refresh(self) -> None:
        if not self._query_is_live():
            self.suggestions = []
            return
        self.suggestions = self.ranker.search(
            self._records,
            self.query,
            min_score=self.settings.autocomplete_min_score,
            limit=self.settings.autocomplete_limit,
        )

    @property
    def state(self) -> SuggestionState:
        if not self._query_is_live():
            return SuggestionState.RECENT
        if self.suggestions:
            return SuggestionState.SUGGESTIONS
        return SuggestionState.NO_RESULTS

    @property
    def visible_recent_searches(self) -> List[str]:
        if self.state is SuggestionState.RECENT:
            return list(self.recent_searches)
        return []

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    def commit(self, term: Optional[str] = None) -> Optional[str]:
        """Commit a search term (or the live query).

        Returns the trimmed term, or None when it is blank.
        """
        value = (term if term else self.query).strip()
        if not value:
            return None
        self._remember(value)
        self._reset()
        return value

    def select(self, record: T) -> T:
        title = str(field_value(record, "title") or "").strip()
        if title:
            self._remember(title)
        self._reset()
        return record

    def clear_recent_searches(self) -> None:
        self.recent_searches = []
        self.store.delete(self.settings.history_key)

    # ------------------------------------------------------------------
    # Keyboard navigation
    # ------------------------------------------------------------------
    @property
    def total_items(self) -> int:
        return len(self.suggestions) + len(self.visible_recent_searches)

    def move_selection(self, delta: int) -> int:
        target = self.selected_index + int(delta)
        self.selected_index = max(-1, min(target, self.total_items - 1))
        return self.selected_index

    def activate(self) -> Optional[CommitResult[T]]:
        """Commit whatever is highlighted, or the live query if nothing is."""
        idx = self.selected_index
        if idx >= 0:
            recent = self.visible_recent_searches
            if idx < len(recent):
                committed = self.commit(recent[idx])
                return CommitResult(query=committed) if committed else None
            idx -= len(recent)
            if idx < len(self.suggestions):
                record = self.select(self.suggestions[idx].item)
                return CommitResult(query=str(field_value(record, "title") or ""), record=record)
            return None
        committed = self.commit()
        return CommitResult(query=committed) if committed else None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _reset(self) -> None:
        self.query = ""
        self.suggestions = []
        self.selected_index = -1

    def _remember(self, term: str) -> None:
        limit = self.settings.history_max_entries
        updated = [term] + [s for s in self.recent_searches if s != term]
        self.recent_searches = updated[:limit]
        self.store.set(self.settings.history_key, json.dumps(self.recent_searches))

    def _load_recent(self) -> List[str]:
        raw: Any = self.store.get(self.settings.history_key)
        if raw is None:
            return []
        items = safe_json_loads_str_list(raw)
        if items is None:
            logger.warning("Discarding malformed recent searches under %r", self.settings.history_key)
            return []
        # Another writer may have left repeats behind; keep first occurrences.
        return list(dict.fromkeys(items))[: self.settings.history_max_entries]
