"""
Key ordering for person records.
"""

from enum import IntEnum


class Ordering(IntEnum):
    """Result of comparing two keys."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def compare(a: str, b: str) -> Ordering:
    """
    Compare two text values byte by byte.

    The comparison is case-sensitive ('A' < 'a') and not locale-aware.
    When one value is a prefix of the other, the shorter one is LESS.
    Python orders str by code point, which matches the ordering of the
    UTF-8 encoded bytes, so no encoding step is needed.

    Args:
        a: Left-hand value.
        b: Right-hand value.

    Returns:
        Ordering.LESS, Ordering.EQUAL or Ordering.GREATER.
    """
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def compare_keys(a: tuple[str, str], b: tuple[str, str]) -> Ordering:
    """Compare (last_name, first_name) keys, last name first."""
    result = compare(a[0], b[0])
    if result != Ordering.EQUAL:
        return result
    return compare(a[1], b[1])
