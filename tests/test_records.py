from datetime import datetime, timezone

from shelfsearch.records import SearchableRecord, normalize_type, records_from_rows


def test_from_row_applies_defaults():
    rec = SearchableRecord.from_row({"id": 12, "title": "Thermodynamics", "type": "lecture_note"})

    assert rec.id == "12"
    assert rec.author == "Unknown"
    assert rec.description == ""
    assert rec.type == "lecture-note"
    assert rec.type_label == "lecture note"
    assert rec.downloads == 0
    assert rec.year == datetime.now(timezone.utc).year
    assert rec.file_url is None


def test_from_row_copies_fields():
    rec = SearchableRecord.from_row(
        {
            "id": "a1",
            "title": "Past Paper 2021",
            "author": "Exams Office",
            "type": "past_paper",
            "department": "Physics",
            "year": 2021,
            "download_count": 17,
            "file_url": "https://files.example/p.pdf",
            "file_name": "p.pdf",
        }
    )

    assert rec.type == "past-paper"
    assert rec.downloads == 17
    assert rec.year == 2021
    assert rec.file_name == "p.pdf"
    assert rec.to_dict()["department"] == "Physics"


def test_normalize_type_passthrough():
    assert normalize_type("book") == "book"
    assert normalize_type(None) == ""


def test_records_from_rows_filters_and_caps():
    rows = [
        {"title": "A", "status": "approved"},
        {"title": "B", "status": "pending"},
        {"title": "C", "status": "approved"},
        {"title": "D", "status": "approved"},
    ]

    assert [r.title for r in records_from_rows(rows)] == ["A", "C", "D"]
    assert [r.title for r in records_from_rows(rows, limit=2)] == ["A", "C"]
    assert len(records_from_rows(rows, approved_only=False)) == 4
