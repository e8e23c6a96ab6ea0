"""
SortedContainer abstract base class for indexes of person records.
"""

from abc import abstractmethod
from collections.abc import Iterator

from persondb.interfaces.range_iterable import RangeIterable
from persondb.models.person import PersonRecord


class SortedContainer(RangeIterable):
    """
    Abstract base class for sorted person indexes keyed by
    (last_name, first_name).

    Provides O(log N) operations for insert, find, and delete.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - AVLTree: Height-balanced binary search tree
    """

    @abstractmethod
    def insert(self, record: PersonRecord) -> bool:
        """
        Insert a record unless its key is already present.

        Args:
            record: The record to insert.

        Returns:
            True if inserted, False if the key already existed. The
            existing record is left untouched in that case.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def find(self, first_name: str, last_name: str) -> PersonRecord | None:
        """
        Retrieve the record for a given name.

        Args:
            first_name: First name of the person.
            last_name: Last name of the person.

        Returns:
            The record if found, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, first_name: str, last_name: str) -> bool:
        """
        Remove a record.

        Args:
            first_name: First name of the person.
            last_name: Last name of the person.

        Returns:
            True if the record was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, first_name: str, last_name: str) -> bool:
        """
        Check if a record exists.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of records.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def iter_last_name(self, last_name: str) -> Iterator[PersonRecord]:
        """
        Iterate over every record with the given last name.

        Args:
            last_name: The last name to match exactly.

        Returns:
            Iterator yielding matching records in key order.
        """
        pass

    @abstractmethod
    def traverse_in_order(self) -> list[PersonRecord]:
        """Return all records sorted by key ascending."""
        pass

    @abstractmethod
    def check_balance(self) -> tuple[bool, int]:
        """
        Verify the structure of the index.

        Returns:
            Tuple of (balanced, height).
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every record."""
        pass
