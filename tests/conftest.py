from __future__ import annotations

import pytest

from shelfsearch.records import SearchableRecord


@pytest.fixture()
def materials() -> list[SearchableRecord]:
    return [
        SearchableRecord(
            id="1",
            title="Registered Nursing Handbook",
            author="Jane Doe",
            description="Clinical practice for nurses",
            department="Nursing",
            type="book",
            downloads=0,
            year=2021,
        ),
        SearchableRecord(
            id="2",
            title="Introduction to Algorithms",
            author="Thomas Cormen",
            department="Computer Science",
            type="book",
            downloads=50,
            year=2019,
        ),
        SearchableRecord(
            id="3",
            title="Data Structures Lecture Notes",
            author="Alan Smith",
            department="Computer Science",
            type="lecture-note",
            downloads=5,
            year=2023,
        ),
        SearchableRecord(
            id="4",
            title="Organic Chemistry Past Paper 2022",
            author="Chem Dept",
            department="Chemistry",
            type="past-paper",
            downloads=0,
            year=2022,
        ),
        SearchableRecord(
            id="5",
            title="Calculus Video Tutorial",
            author="Mary Major",
            department="Mathematics",
            type="tutorial",
            downloads=200,
            year=2020,
        ),
    ]
