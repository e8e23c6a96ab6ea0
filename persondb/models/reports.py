"""
Result objects returned by database-level operations.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoadReport:
    """
    Summary of loading a database file.

    Attributes:
        loaded: Records inserted into the index.
        skipped: Malformed lines that were rejected.
        duplicates: Well-formed records dropped because the key existed.
    """

    loaded: int = 0
    skipped: int = 0
    duplicates: int = 0


@dataclass(frozen=True)
class BalanceReport:
    """Result of an index integrity check."""

    balanced: bool
    height: int
    size: int
