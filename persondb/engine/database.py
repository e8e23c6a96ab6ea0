"""
PersonDatabase - Main person database API.
"""

import asyncio
import logging
import os
from dataclasses import replace
from decimal import Decimal

from persondb.engine.loader import RecordLoader
from persondb.engine.snapshot import SnapshotWriter
from persondb.interfaces.sorted_container import SortedContainer
from persondb.models.person import PersonKey, PersonRecord
from persondb.models.reports import BalanceReport, LoadReport
from persondb.models.sortedcontainers import AVLTree

logger = logging.getLogger(__name__)


class PersonDatabase:
    """
    Disk-backed store of person records keyed by (last_name, first_name).

    Provides:
    - find(first, last): Exact lookup
    - find_by_last_name(last) / find_by_first_name(first): Multi-result lookups
    - get_range(start, end): Key range scan
    - oldest(): Record with the earliest birth date
    - insert / update / relocate / delete: Mutations
    - verify(): Index integrity check
    - load / save: Flat-file persistence

    Architecture:
    - Records live in a SortedContainer (AVLTree by default)
    - Every operation holds a single lock, so a mutation never
      overlaps another mutation or a traversal
    - File I/O runs in the default executor while the lock is held
    """

    def __init__(self, file_path: str, container: SortedContainer | None = None) -> None:
        """
        Initialize the database without loading anything.

        Args:
            file_path: Database file used by load() and save() by default.
            container: Index to use. A fresh AVLTree if omitted.
        """
        if not file_path or not file_path.strip():
            raise ValueError("file_path cannot be empty")

        self._file_path = os.path.abspath(file_path)
        self._index: SortedContainer = container if container is not None else AVLTree()
        self._lock = asyncio.Lock()

    @classmethod
    async def create(cls, file_path: str, container: SortedContainer | None = None) -> "PersonDatabase":
        """
        Async factory method that creates a database and loads its file.

        Args:
            file_path: Database file to load.
            container: Optional index to populate.

        Returns:
            Loaded PersonDatabase instance.

        Raises:
            DatabaseFileError: If the file cannot be read.
        """
        database = cls(file_path, container)
        await database.load()
        return database

    @property
    def file_path(self) -> str:
        return self._file_path

    def size(self) -> int:
        return self._index.size()

    async def load(self, file_path: str | None = None) -> LoadReport:
        """
        Load records from a file into the index.

        Records whose key is already present are dropped.

        Args:
            file_path: File to read. Defaults to the database file.

        Returns:
            LoadReport describing the load.

        Raises:
            DatabaseFileError: If the file cannot be read. The index is
                left unchanged.
        """
        loader = RecordLoader(file_path or self._file_path)
        async with self._lock:
            loop = asyncio.get_running_loop()
            # Only file I/O leaves the event loop; the index is mutated here
            records, skipped = await loop.run_in_executor(None, loader.read)
            return loader.insert_all(self._index, records, skipped)

    async def save(self, file_path: str | None = None) -> int:
        """
        Rewrite the database file in ascending key order.

        Args:
            file_path: File to write. Defaults to the database file.

        Returns:
            Number of records written.

        Raises:
            DatabaseFileError: If the file cannot be written.
        """
        async with self._lock:
            # Copies taken on the event loop, so the worker thread never
            # sees the live index or records
            snapshot = [replace(record) for record in self._index]
            writer = SnapshotWriter(snapshot, file_path or self._file_path)
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, writer.write)

    async def insert(self, record: PersonRecord) -> bool:
        """
        Insert a record.

        Returns:
            True if inserted, False if a record with the same name exists
            (the existing record is kept).
        """
        async with self._lock:
            return self._index.insert(record)

    async def find(self, first_name: str, last_name: str) -> PersonRecord | None:
        async with self._lock:
            return self._index.find(first_name, last_name)

    async def find_by_last_name(self, last_name: str) -> list[PersonRecord]:
        """
        Find every record with the given last name, in key order.

        Uses the index ordering to skip subtrees that cannot match.
        """
        async with self._lock:
            return list(self._index.iter_last_name(last_name))

    async def find_by_first_name(self, first_name: str) -> list[PersonRecord]:
        """Find every record with the given first name. Full scan."""
        async with self._lock:
            return [r for r in self._index if r.first_name == first_name]

    async def get_range(
        self, start: PersonKey | None = None, end: PersonKey | None = None
    ) -> list[PersonRecord]:
        """
        Get all records with keys in [start, end).

        Args:
            start: Start key (inclusive), as (last_name, first_name).
            end: End key (exclusive), as (last_name, first_name).

        Returns:
            Records in key order.
        """
        async with self._lock:
            return list(self._index.iterator(start, end))

    async def all_records(self) -> list[PersonRecord]:
        async with self._lock:
            return self._index.traverse_in_order()

    async def oldest(self) -> PersonRecord | None:
        """
        Find the person with the earliest birth date.

        On ties the first record in key order wins.

        Returns:
            The oldest record, or None if the database is empty.
        """
        async with self._lock:
            oldest = None
            for record in self._index:
                if oldest is None or record.is_older_than(oldest):
                    oldest = record
            return oldest

    async def update(
        self, first_name: str, last_name: str, field: str, value: str | Decimal
    ) -> bool:
        """
        Update a non-key field of a record in place.

        Args:
            first_name: First name of the person.
            last_name: Last name of the person.
            field: Field to change (state, zip_code, password or balance).
            value: New value.

        Returns:
            True if the record was found and updated, False otherwise.

        Raises:
            ValueError: If the field cannot be updated or the value is invalid.
        """
        async with self._lock:
            record = self._index.find(first_name, last_name)
            if record is None:
                return False

            record.set_field(field, value)
            logger.debug(f"Updated {field} of {first_name} {last_name}")
            return True

    async def relocate(self, first_name: str, last_name: str, zip_code: str) -> bool:
        """Move a person to a new zip code."""
        return await self.update(first_name, last_name, "zip_code", zip_code)

    async def delete(self, first_name: str, last_name: str) -> bool:
        """
        Delete a record.

        Returns:
            True if the record existed and was removed.
        """
        async with self._lock:
            return self._index.delete(first_name, last_name)

    async def verify(self) -> BalanceReport:
        """Check that the index is height-balanced and report its height."""
        async with self._lock:
            balanced, height = self._index.check_balance()
            return BalanceReport(balanced=balanced, height=height, size=self._index.size())

    async def close(self) -> None:
        """Tear down the in-memory index. Nothing is saved."""
        async with self._lock:
            self._index.clear()

    async def __aenter__(self) -> "PersonDatabase":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
