"""
SnapshotWriter - Persist an index to its database file.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from persondb.models.exceptions import DatabaseFileError
from persondb.models.person import PersonRecord
from persondb.models.record_line import encode_line

logger = logging.getLogger(__name__)


class SnapshotWriter:
    """
    Rewrites the whole database file from a sequence of records.

    Handles:
    - Serializing records in the order given (ascending key order when
      taken from an index)
    - Writing to a temporary file next to the target
    - Atomically replacing the target once the write succeeded
    """

    def __init__(self, records: Iterable[PersonRecord], file_path: str) -> None:
        """
        Initialize writer.

        Args:
            records: Records to persist, usually a snapshot of an index.
            file_path: Destination database file.
        """
        self._records = records
        self._file_path = file_path

    def write(self) -> int:
        """
        Write every record to the database file.

        Returns:
            Number of records written.

        Raises:
            DatabaseFileError: If the file cannot be written. The previous
                file contents are left intact.
        """
        tmp_path = f"{self._file_path}.tmp"
        count = 0

        try:
            Path(self._file_path).parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                for record in self._records:
                    f.write(encode_line(record) + "\n")
                    count += 1
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._file_path)
        except OSError as e:
            self._cleanup(tmp_path)
            raise DatabaseFileError(self._file_path, str(e)) from e

        logger.info(f"Saved {count} person records to {self._file_path}")
        return count

    def _cleanup(self, tmp_path: str) -> None:
        """Remove a partially written temp file."""
        try:
            os.remove(tmp_path)
        except OSError:
            pass  # Best effort cleanup
