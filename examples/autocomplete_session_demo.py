import argparse
import json

from shelfsearch.autocomplete import AutocompleteSession, JsonFileHistoryStore
from shelfsearch.records import records_from_rows
from shelfsearch.search import BrowseFilters, filter_and_sort, search


ROWS = [
    {"id": 1, "title": "Registered Nursing Handbook", "author": "Jane Doe", "department": "Nursing",
     "type": "book", "year": 2021, "download_count": 12, "status": "approved"},
    {"id": 2, "title": "Introduction to Algorithms", "author": "Thomas Cormen",
     "department": "Computer Science", "type": "book", "year": 2019, "download_count": 80,
     "status": "approved"},
    {"id": 3, "title": "Data Structures Lecture Notes", "author": None, "department": "Computer Science",
     "type": "lecture_note", "year": 2023, "download_count": 4, "status": "approved"},
    {"id": 4, "title": "Organic Chemistry Past Paper 2022", "department": "Chemistry",
     "type": "past_paper", "year": 2022, "status": "approved"},
    {"id": 5, "title": "Draft Thermodynamics Notes", "department": "Physics",
     "type": "lecture_note", "year": 2024, "status": "pending"},
]


def show_step(title: str) -> None:
    print("\n" + "=" * 78)
    print(title)
    print("=" * 78)


def show_json(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Walk through search, browse and autocomplete.")
    parser.add_argument("--query", default="algoritms intro")
    parser.add_argument("--history", default="./recent_searches.json")
    args = parser.parse_args()

    records = records_from_rows(ROWS, limit=100)

    show_step(f"1) Ranked search for {args.query!r}")
    show_json([r.to_dict() for r in search(records, args.query)])

    show_step("2) Browse: Computer Science, newest first")
    ordered = filter_and_sort(records, BrowseFilters(department="Computer Science", sort_by="newest"))
    show_json([r.title for r in ordered])

    show_step("3) Autocomplete while typing")
    session = AutocompleteSession(records, JsonFileHistoryStore(args.history))
    for typed in ("n", "nu", "nurs", "zzqx"):
        session.set_query(typed)
        show_json({
            "typed": typed,
            "state": session.state.value,
            "suggestions": [s.item.title for s in session.suggestions],
            "recent": session.visible_recent_searches,
        })

    show_step("4) Commit and reload history")
    session.set_query("nurs")
    session.move_selection(1)
    result = session.activate()
    show_json({"committed": result.query if result else None, "recent": session.recent_searches})


if __name__ == "__main__":
    main()
