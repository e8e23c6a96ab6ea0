"""
Shared pytest fixtures for person database tests.
"""

import os
import tempfile
from decimal import Decimal

import pytest
import pytest_asyncio

from persondb.engine.database import PersonDatabase
from persondb.models.person import PersonRecord
from persondb.models.sortedcontainers import AVLTree


def make_person(
    last: str,
    first: str,
    year: int = 1980,
    month: int = 1,
    day: int = 1,
    state: str = "NY",
    zip_code: str = "10001",
    balance: str = "100.50",
) -> PersonRecord:
    """Build a record with sensible defaults for the fields a test ignores."""
    return PersonRecord(
        last_name=last,
        first_name=first,
        state=state,
        zip_code=zip_code,
        birth_year=year,
        birth_month=month,
        birth_day=day,
        password="secret",
        balance=Decimal(balance),
        ssn="123-45-6789",
    )


SAMPLE_LINES = [
    "Smith John NY 10001 1980 1 1 pw1 100.50 111-11-1111",
    "Doe Jane CA 90210 1975 6 15 pw2 -20.25 222-22-2222",
    "Smith Anna TX 73301 1990 3 9 pw3 0 333-33-3333",
    "Brown Bob WA 98101 1975 6 15 pw4 1e3 444-44-4444",
    "Adams John FL 33101 2001 12 31 pw5 5.00 555-55-5555",
]


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def database_file(temp_dir):
    """Provide a database file holding SAMPLE_LINES."""
    path = os.path.join(temp_dir, "database.txt")
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(SAMPLE_LINES) + "\n")
    return path


@pytest_asyncio.fixture
async def database(database_file):
    """Provide a PersonDatabase loaded from database_file."""
    async with await PersonDatabase.create(database_file) as db:
        yield db


@pytest_asyncio.fixture
async def empty_database(temp_dir):
    """Provide a PersonDatabase with nothing loaded."""
    async with PersonDatabase(os.path.join(temp_dir, "empty.txt")) as db:
        yield db


@pytest.fixture
def tree():
    """Provide a fresh AVLTree instance."""
    return AVLTree()


@pytest.fixture
def sample_records():
    """Provide a handful of records with distinct keys."""
    return [
        make_person("Smith", "John", 1980, 1, 1),
        make_person("Doe", "Jane", 1975, 6, 15),
        make_person("Smith", "Anna", 1990, 3, 9),
        make_person("Brown", "Bob", 1975, 6, 15),
    ]
