"""
PersonRecord - a single entry of the person database.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

# (last_name, first_name)
PersonKey = tuple[str, str]

# Fields that can change without touching the record's position in the index
MUTABLE_FIELDS = frozenset({"state", "zip_code", "password", "balance"})

# Fields stored as single whitespace-free tokens in the database file
TEXT_FIELDS = ("last_name", "first_name", "state", "zip_code", "password", "ssn")


def check_token(name: str, value: str) -> None:
    """
    Validate a text field value.

    Raises:
        ValueError: If the value is empty or contains whitespace.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Field '{name}' cannot be empty")
    if any(c.isspace() for c in value):
        raise ValueError(f"Field '{name}' cannot contain whitespace: {value!r}")


@dataclass
class PersonRecord:
    """
    Represents one person stored in the database.

    Attributes:
        last_name: Primary key component, compared first.
        first_name: Secondary key component.
        state: State of residence.
        zip_code: Postal code.
        birth_year: Year of birth (no calendar validation).
        birth_month: Month of birth.
        birth_day: Day of birth.
        password: Account password, stored as given.
        balance: Signed account balance.
        ssn: Social security number.
    """

    last_name: str
    first_name: str
    state: str
    zip_code: str
    birth_year: int
    birth_month: int
    birth_day: int
    password: str
    balance: Decimal
    ssn: str

    def __post_init__(self) -> None:
        for name in TEXT_FIELDS:
            check_token(name, getattr(self, name))

    @property
    def key(self) -> PersonKey:
        return (self.last_name, self.first_name)

    @property
    def birth_date(self) -> tuple[int, int, int]:
        return (self.birth_year, self.birth_month, self.birth_day)

    def is_older_than(self, other: "PersonRecord") -> bool:
        """Return True only if this person was born strictly earlier."""
        return self.birth_date < other.birth_date

    def set_field(self, name: str, value: str | Decimal) -> None:
        """
        Update a non-key field in place.

        Args:
            name: Field name, one of MUTABLE_FIELDS.
            value: New value. Balance accepts text or Decimal.

        Raises:
            ValueError: If the field is a key field or unknown, or if the
                value is not a valid token or balance.
        """
        if name not in MUTABLE_FIELDS:
            raise ValueError(
                f"Field '{name}' cannot be updated. "
                f"Updatable fields: {', '.join(sorted(MUTABLE_FIELDS))}"
            )

        if name != "balance":
            check_token(name, value)
        elif not isinstance(value, Decimal):
            try:
                value = Decimal(value)
            except InvalidOperation:
                raise ValueError(f"Invalid balance: {value!r}") from None

        setattr(self, name, value)
