"""
Data models for the person database.
"""

from persondb.models.exceptions import DatabaseFileError
from persondb.models.ordering import Ordering, compare, compare_keys
from persondb.models.person import MUTABLE_FIELDS, PersonKey, PersonRecord
from persondb.models.record_line import DecodeResult, decode_line, encode_line
from persondb.models.reports import BalanceReport, LoadReport

__all__ = [
    "DatabaseFileError",
    "Ordering",
    "compare",
    "compare_keys",
    "MUTABLE_FIELDS",
    "PersonKey",
    "PersonRecord",
    "DecodeResult",
    "decode_line",
    "encode_line",
    "BalanceReport",
    "LoadReport",
]
