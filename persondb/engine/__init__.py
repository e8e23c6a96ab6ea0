"""
Database engine: query layer and file persistence.
"""

from persondb.engine.database import PersonDatabase
from persondb.engine.loader import RecordLoader
from persondb.engine.snapshot import SnapshotWriter

__all__ = ["PersonDatabase", "RecordLoader", "SnapshotWriter"]
