"""
Custom exceptions for the person database.
"""


class DatabaseFileError(Exception):
    """
    Raised when the database file cannot be read or written.

    In-memory state is never modified when this is raised.
    """

    def __init__(self, path: str, reason: str):
        """
        Initialize file error.

        Args:
            path: The database file involved.
            reason: Human-readable cause, usually from the OSError.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot access database file {path}: {reason}")
