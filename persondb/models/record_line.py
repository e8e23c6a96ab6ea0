"""
Line codec for the flat-file person format.

Each record is one line of ten whitespace-separated tokens:
last_name first_name state zip_code birth_year birth_month birth_day
password balance ssn
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from persondb.models.person import PersonRecord

FIELD_COUNT = 10


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of decoding one line.

    Exactly one of record/error is set.
    """

    record: PersonRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def decode_line(line: str) -> DecodeResult:
    """
    Decode a line into a PersonRecord.

    Tokens after the tenth are ignored. Never raises: malformed input is
    reported through DecodeResult.error.

    Args:
        line: Raw text line, trailing newline allowed.

    Returns:
        DecodeResult holding the record or the reason it was rejected.
    """
    tokens = line.split()[:FIELD_COUNT]
    if len(tokens) < FIELD_COUNT:
        return DecodeResult(
            error=f"expected {FIELD_COUNT} fields, got {len(tokens)}"
        )

    last, first, state, zip_code, year, month, day, password, balance, ssn = tokens

    try:
        birth_year = int(year)
        birth_month = int(month)
        birth_day = int(day)
    except ValueError:
        return DecodeResult(error=f"invalid birth date: {year} {month} {day}")

    try:
        parsed_balance = Decimal(balance)
    except InvalidOperation:
        return DecodeResult(error=f"invalid balance: {balance}")

    return DecodeResult(
        record=PersonRecord(
            last_name=last,
            first_name=first,
            state=state,
            zip_code=zip_code,
            birth_year=birth_year,
            birth_month=birth_month,
            birth_day=birth_day,
            password=password,
            balance=parsed_balance,
            ssn=ssn,
        )
    )


def encode_line(record: PersonRecord) -> str:
    """Serialize a record to a single line (without newline)."""
    return " ".join(
        (
            record.last_name,
            record.first_name,
            record.state,
            record.zip_code,
            str(record.birth_year),
            str(record.birth_month),
            str(record.birth_day),
            record.password,
            str(record.balance),
            record.ssn,
        )
    )
