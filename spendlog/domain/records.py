"""Pure functions for record validation, normalization and display.

This module contains the functional core for record data:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

import datetime as dt
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from spendlog.domain.models import CategoryName, Description, Money, RecordId
from spendlog.errors import ValidationError


@dataclass(frozen=True)
class Record:
    """Immutable income or expense record."""

    id: RecordId
    description: Description
    amount: Money  # Negative for expenses, positive for income
    date: dt.date | None = None
    category: CategoryName | None = None

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_uncategorized(self) -> bool:
        return self.category is None


@dataclass(frozen=True)
class RecordDraft:
    """Validated record fields, everything except the id."""

    description: Description
    amount: Money
    date: dt.date | None = None
    category: CategoryName | None = None


def normalize_description(description: str) -> Description:
    """Trim a description and reject it if nothing is left.

    Args:
        description: Raw description text.

    Returns:
        Trimmed description.

    Raises:
        ValidationError: If the description is empty after trimming.
    """
    trimmed = description.strip()
    if not trimmed:
        raise ValidationError("Description must not be empty")
    return Description(trimmed)


def normalize_category(category: str | None) -> CategoryName | None:
    """Trim a category, mapping empty or whitespace-only text to None."""
    if category is None:
        return None
    trimmed = category.strip()
    return CategoryName(trimmed) if trimmed else None


def parse_amount(value: str | int | float | Decimal) -> Money:
    """Parse a signed decimal amount into cents.

    Values with more than two decimal places are rounded half-up.

    Args:
        value: Amount in major units (e.g. "-15.50", 2000, 12.5).

    Returns:
        Amount in cents.

    Raises:
        ValidationError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Amount must be a number, got {value!r}")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Amount must be a number, got {value!r}") from None

    if not amount.is_finite():
        raise ValidationError(f"Amount must be a finite number, got {value!r}")

    cents = (amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return Money(int(cents))


def parse_date(value: dt.date | str | None) -> dt.date | None:
    """Parse an ISO calendar date, treating blank values as "no date".

    Args:
        value: A date, an ISO date string (YYYY-MM-DD), or None.

    Returns:
        The calendar date, or None when absent.

    Raises:
        ValidationError: If a non-blank string is not an ISO date.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value

    text = value.strip()
    if not text:
        return None
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def build_draft(
    description: str,
    amount: str | int | float | Decimal,
    date: dt.date | str | None = None,
    category: str | None = None,
) -> RecordDraft:
    """Validate and normalize raw field values into a draft.

    Args:
        description: Description text (trimmed, must be non-empty).
        amount: Amount in major units (negative for expenses).
        date: Optional calendar date.
        category: Optional category (blank means no category).

    Returns:
        RecordDraft ready to be stored.

    Raises:
        ValidationError: If any field is invalid.
    """
    return RecordDraft(
        description=normalize_description(description),
        amount=parse_amount(amount),
        date=parse_date(date),
        category=normalize_category(category),
    )


def draft_from_record(record: Record) -> RecordDraft:
    """Extract the editable fields of a record."""
    return RecordDraft(
        description=record.description,
        amount=record.amount,
        date=record.date,
        category=record.category,
    )


def apply_draft(record_id: RecordId, draft: RecordDraft) -> Record:
    """Create a record from an id and a validated draft."""
    return Record(
        id=record_id,
        description=draft.description,
        amount=draft.amount,
        date=draft.date,
        category=draft.category,
    )


def to_major_units(amount: Money) -> Decimal:
    """Convert cents to exact major units (e.g. -1550 -> Decimal("-15.50"))."""
    return Decimal(amount).scaleb(-2)


def format_money(amount: Money, symbol: str = "$", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in cents.
        symbol: Currency symbol placed before the digits.
        include_sign: Whether to prefix positive amounts with "+".

    Returns:
        Formatted string (e.g., "-$15.00", "$1,985.00" or "+$1,985.00").
    """
    formatted = f"{symbol}{abs(amount) / 100:,.2f}"

    if amount < 0:
        return f"-{formatted}"
    if include_sign and amount > 0:
        return f"+{formatted}"
    return formatted
