"""Shared fixtures and record factories for the test suite."""

from __future__ import annotations

import random

import pytest

from changelog_query.domain.record import Record

SEED = 42

NAMES = ["Ali", "Reza", "Sara", "Maryam", "Hossein", "Niloofar", "Kaveh", "Ali Reza"]

TITLES = [
    "Apartment 120m Tehran",
    "Peugeot 206 2019",
    "iPhone 13 Pro",
    "Office desk, barely used",
    "Garden villa in Karaj",
    "Mountain bike 27.5",
]

FIELDS = ["price", "description", "title", "status", "category"]

DATES = [
    "2023-01-01",
    "2023-01-02",
    "2023-01-03",
    "2023-01-01T08:30:00Z",
    "2023-01-01T08:30:00.250Z",
    "2023-02-14T12:00:00+03:30",
    "2023-03-20",
]


def make_record(
    id: int = 1,
    name: str = "Ali",
    date: str = "2023-01-01",
    title: str = "Apartment 120m Tehran",
    field: str = "price",
    old_value: str = "100",
    new_value: str = "120",
) -> Record:
    """Create a test Record with sensible defaults."""
    return Record(
        id=id,
        name=name,
        date=date,
        title=title,
        field=field,
        old_value=old_value,
        new_value=new_value,
    )


def generate_records(count: int, seed: int = SEED) -> list[Record]:
    """Generate a batch of random records with many shared dates."""
    rng = random.Random(seed)
    records: list[Record] = []
    for i in range(count):
        records.append(Record(
            id=i + 1,
            name=rng.choice(NAMES),
            date=rng.choice(DATES),
            title=rng.choice(TITLES),
            field=rng.choice(FIELDS),
            old_value=str(rng.randint(0, 500)),
            new_value=str(rng.randint(0, 500)),
        ))
    return records


@pytest.fixture
def two_records() -> list[Record]:
    """The two-record dataset from the end-to-end date scenario."""
    return [
        make_record(id=1, name="Ali", date="2023-01-01", title="Apartment", field="price"),
        make_record(id=2, name="Reza", date="2023-01-02", title="Peugeot", field="status"),
    ]


@pytest.fixture
def sample_records() -> list[Record]:
    return generate_records(500)
