from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from .matcher import match_score
from ..config import SearchSettings, search_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FieldWeight:
    """A searchable field name and its weight."""

    name: str
    weight: float


@dataclass
class ScoredResult(Generic[T]):
    item: T
    score: float

    def to_dict(self) -> dict:
        item = self.item
        payload = item.to_dict() if hasattr(item, "to_dict") else item
        return {"record": payload, "score": self.score}


def default_fields(settings: SearchSettings = search_settings) -> List[FieldWeight]:
    return [
        FieldWeight("title", settings.title_weight),
        FieldWeight("author", settings.author_weight),
        FieldWeight("description", settings.description_weight),
        FieldWeight("department", settings.department_weight),
        FieldWeight("type_label", settings.type_weight),
    ]


def field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def field_text(record: Any, name: str) -> str:
    """Read a text field; missing or ``None`` reads as an empty string."""
    value = field_value(record, name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _type_label(record: Any) -> str:
    label = field_value(record, "type_label")
    if label is None:
        slug = field_value(record, "type")
        label = (slug or "").replace("-", " ") if isinstance(slug, str) else ""
    return str(label)


class Ranker:
    """Scores records across weighted fields and orders them by relevance."""

    def __init__(
        self,
        fields: Optional[Sequence[FieldWeight]] = None,
        *,
        popularity_field: str = "downloads",
        settings: SearchSettings = search_settings,
    ):
        self.settings = settings
        self.fields: List[FieldWeight] = list(fields) if fields is not None else default_fields(settings)
        self.popularity_field = popularity_field

    def _text(self, record: Any, name: str) -> str:
        if name == "type_label":
            return _type_label(record)
        return field_text(record, name)

    def popularity_boost(self, record: Any) -> float:
        raw = field_value(record, self.popularity_field)
        popularity = float(raw or 0)
        divisor = self.settings.popularity_divisor or 1.0
        boost = min(popularity / divisor, self.settings.popularity_max_boost)
        return max(boost, 0.0)

    def score(self, query: str, record: Any) -> float:
        """Best weighted field score plus the popularity boost."""
        combined = 0.0
        for f in self.fields:
            s = match_score(query, self._text(record, f.name)) * f.weight
            if s > combined:
                combined = s
        return combined + self.popularity_boost(record)

    def search(
        self,
        records: Sequence[T],
        query: str,
        *,
        min_score: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[ScoredResult[T]]:
        """Rank records against a query.

        A blank query returns every record with score 1.0 in input order.
        """
        if not (query or "").strip():
            return [ScoredResult(item=r, score=1.0) for r in records]

        threshold = self.settings.min_score if min_score is None else float(min_score)

        results: List[ScoredResult[T]] = []
        for record in records:
            s = self.score(query, record)
            if s >= threshold:
                results.append(ScoredResult(item=record, score=s))

        results.sort(key=lambda r: r.score, reverse=True)

        if limit is not None:
            results = results[: max(int(limit), 0)]

        logger.debug(
            "search query=%r candidates=%d hits=%d min_score=%.2f",
            query,
            len(records),
            len(results),
            threshold,
        )
        return results


ranker = Ranker()


def search(
    records: Sequence[T],
    query: str,
    *,
    min_score: Optional[float] = None,
    limit: Optional[int] = None,
    fields: Optional[Sequence[FieldWeight]] = None,
) -> List[ScoredResult[T]]:
    """Rank records with the default ranker, or with custom field weights."""
    r = ranker if fields is None else Ranker(fields)
    return r.search(records, query, min_score=min_score, limit=limit)
