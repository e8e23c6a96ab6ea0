"""
RecordLoader - Populate an index from a database file.
"""

import logging

from persondb.interfaces.sorted_container import SortedContainer
from persondb.models.exceptions import DatabaseFileError
from persondb.models.person import PersonRecord
from persondb.models.record_line import decode_line
from persondb.models.reports import LoadReport

logger = logging.getLogger(__name__)


class RecordLoader:
    """
    Reads a flat person file and inserts every valid record.

    Malformed lines, including lines that are not valid UTF-8, are skipped
    with a warning; a single bad line never aborts the load. Blank lines
    are ignored silently.
    """

    def __init__(self, file_path: str) -> None:
        """
        Initialize the loader.

        Args:
            file_path: Path to the database file.
        """
        self.file_path = file_path

    def read(self) -> tuple[list[tuple[int, PersonRecord]], int]:
        """
        Read and decode the file without touching any index.

        Returns:
            Tuple of:
            - List of (line number, record) pairs in file order
            - Number of malformed lines skipped

        Raises:
            DatabaseFileError: If the file cannot be opened or read.
        """
        try:
            with open(self.file_path, "rb") as f:
                raw_lines = f.readlines()
        except OSError as e:
            raise DatabaseFileError(self.file_path, str(e)) from e

        records: list[tuple[int, PersonRecord]] = []
        skipped = 0
        for line_no, raw_line in enumerate(raw_lines, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning(
                    f"Skipping invalid record at {self.file_path}:{line_no} "
                    f"(not valid UTF-8: {e.reason}): {raw_line.rstrip()!r}"
                )
                skipped += 1
                continue

            if not line.strip():
                continue

            result = decode_line(line)
            if not result.ok:
                logger.warning(
                    f"Skipping invalid record at {self.file_path}:{line_no} "
                    f"({result.error}): {line.rstrip()}"
                )
                skipped += 1
                continue

            records.append((line_no, result.record))

        return records, skipped

    def insert_all(
        self,
        container: SortedContainer,
        records: list[tuple[int, PersonRecord]],
        skipped: int = 0,
    ) -> LoadReport:
        """
        Insert decoded records; keys already present are kept.

        Args:
            container: Index to insert into.
            records: (line number, record) pairs from read().
            skipped: Malformed line count to carry into the report.

        Returns:
            LoadReport with loaded/skipped/duplicate counts.
        """
        loaded = duplicates = 0
        for line_no, record in records:
            if container.insert(record):
                loaded += 1
            else:
                logger.warning(
                    f"Skipping duplicate record at {self.file_path}:{line_no}: "
                    f"{record.first_name} {record.last_name}"
                )
                duplicates += 1

        logger.info(
            f"Loaded {loaded} person records from {self.file_path} "
            f"({skipped} skipped, {duplicates} duplicates)"
        )
        return LoadReport(loaded=loaded, skipped=skipped, duplicates=duplicates)

    def load(self, container: SortedContainer) -> LoadReport:
        """
        Load records into a container.

        Args:
            container: Index to insert into. Existing keys are kept.

        Returns:
            LoadReport with loaded/skipped/duplicate counts.

        Raises:
            DatabaseFileError: If the file cannot be opened or read. The
                container is left unchanged.
        """
        records, skipped = self.read()
        return self.insert_all(container, records, skipped)
