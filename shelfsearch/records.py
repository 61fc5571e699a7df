from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional


# Storage uses snake_case type slugs; the portal shows hyphenated ones.
_TYPE_ALIASES = {
    "lecture_note": "lecture-note",
    "past_paper": "past-paper",
}


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def normalize_type(value: Optional[str]) -> str:
    v = (value or "").strip()
    return _TYPE_ALIASES.get(v, v)


@dataclass(frozen=True)
class SearchableRecord:
    """A catalog material as seen by the search engine.

    Text fields default to empty strings so every field is safe to score.
    """

    title: str
    author: str = ""
    description: str = ""
    department: str = ""
    type: str = ""
    downloads: int = 0
    year: int = field(default_factory=_current_year)
    id: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @property
    def type_label(self) -> str:
        return self.type.replace("-", " ")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SearchableRecord":
        """Build a record from a raw ``materials`` row."""
        rid = row.get("id")
        return cls(
            id=str(rid) if rid is not None else None,
            title=row.get("title") or "",
            author=row.get("author") or "Unknown",
            description=row.get("description") or "",
            department=row.get("department") or "",
            type=normalize_type(row.get("type")),
            downloads=int(row.get("download_count") or 0),
            year=int(row.get("year") or _current_year()),
            file_url=row.get("file_url") or None,
            file_name=row.get("file_name") or None,
            thumbnail_url=row.get("thumbnail_url") or None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "department": self.department,
            "type": self.type,
            "downloads": self.downloads,
            "year": self.year,
            "file_url": self.file_url,
            "file_name": self.file_name,
            "thumbnail_url": self.thumbnail_url,
        }


def records_from_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    approved_only: bool = True,
    limit: Optional[int] = None,
) -> list[SearchableRecord]:
    """Adapt storage rows, optionally keeping only approved materials."""
    out: list[SearchableRecord] = []
    for row in rows:
        if limit is not None and len(out) >= int(limit):
            break
        if approved_only and row.get("status") != "approved":
            continue
        out.append(SearchableRecord.from_row(row))
    return out
