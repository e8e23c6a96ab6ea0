"""
Abstract base classes for person indexes.
"""

from persondb.interfaces.range_iterable import RangeIterable
from persondb.interfaces.sorted_container import SortedContainer

__all__ = ["RangeIterable", "SortedContainer"]
