"""
RangeIterable protocol for data structures that support range iteration.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator

from persondb.models.person import PersonKey, PersonRecord


class RangeIterable(ABC):
    """
    Protocol for data structures that support iteration over a range of keys.

    Implementations must support:
    - Full iteration via __iter__
    - Range-bounded iteration via iterator(start, end)
    - Async iteration via __aiter__
    - Async range-bounded iteration via async_iterator(start, end)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[PersonRecord]:
        """Return an iterator over all records in key order."""
        pass

    @abstractmethod
    def iterator(
        self, start: PersonKey | None = None, end: PersonKey | None = None
    ) -> Iterator[PersonRecord]:
        """
        Return an iterator over records whose keys fall in the range.

        Args:
            start: Start key (inclusive). If None, starts from the beginning.
            end: End key (exclusive). If None, iterates to the end.

        Returns:
            Iterator yielding records in key order.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[PersonRecord]:
        """Return an async iterator over all records in key order."""
        pass

    @abstractmethod
    def async_iterator(
        self, start: PersonKey | None = None, end: PersonKey | None = None
    ) -> AsyncIterator[PersonRecord]:
        """
        Return an async iterator over records whose keys fall in the range.

        Args:
            start: Start key (inclusive). If None, starts from the beginning.
            end: End key (exclusive). If None, iterates to the end.

        Returns:
            AsyncIterator yielding records in key order.
        """
        pass
