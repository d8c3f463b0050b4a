"""Pure functions for filtering and sorting the visible record list.

This module contains the functional core for list views:
- No I/O operations (no storage, no console, no files)
- No side effects, the input sequence is never mutated
- Pure data transformations
- Easy to test

The current date is always passed in by the caller, so every function here
is deterministic.
"""

import datetime as dt
import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from spendlog.dates import is_within, month_bounds, week_bounds
from spendlog.domain.records import Record
from spendlog.errors import ValidationError

CATEGORY_ALL = "all"
CATEGORY_UNCATEGORIZED = "uncategorized"

# Records without a date sort as if dated at the epoch
EPOCH = dt.date(1970, 1, 1)


class DateRange(str, Enum):
    """Date range selector for the list view."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class SortKey(str, Enum):
    """Sort order for the list view."""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


@dataclass
class FilterCriteria:
    """Search, filter and sort selection driving the visible records.

    Mutable: the presentation layer updates it as the user interacts and
    calls reset() to return to the defaults.
    """

    search: str = ""
    category: str = CATEGORY_ALL
    date_range: DateRange = DateRange.ALL
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    sort: SortKey = SortKey.DATE_DESC

    def reset(self) -> None:
        """Restore every field to its default."""
        defaults = FilterCriteria()
        self.search = defaults.search
        self.category = defaults.category
        self.date_range = defaults.date_range
        self.date_from = defaults.date_from
        self.date_to = defaults.date_to
        self.sort = defaults.sort


def validate_criteria(criteria: FilterCriteria) -> None:
    """Check a criteria selection before a view is computed.

    Only the custom date range can be invalid: both bounds are required and
    the start must not be after the end.

    Args:
        criteria: Criteria to check.

    Raises:
        ValidationError: If the custom date range is incomplete or inverted.
    """
    if criteria.date_range is not DateRange.CUSTOM:
        return

    if criteria.date_from is None or criteria.date_to is None:
        raise ValidationError("Please select both start and end dates")

    if criteria.date_from > criteria.date_to:
        raise ValidationError("Start date must be before end date")


def matches_search(record: Record, search: str) -> bool:
    """Check if description or category contains the search text.

    Matching is case-insensitive. Blank search text matches everything.
    """
    needle = search.strip().lower()
    if not needle:
        return True

    if needle in record.description.lower():
        return True

    return record.category is not None and needle in record.category.lower()


def matches_category(record: Record, selector: str) -> bool:
    """Check a record against the category selector.

    Args:
        record: Record to check.
        selector: "all", "uncategorized", or an exact (case-sensitive) category name.

    Returns:
        True if the record should be kept.
    """
    if selector == CATEGORY_ALL:
        return True
    if selector == CATEGORY_UNCATEGORIZED:
        return record.category is None
    return record.category == selector


def date_range_bounds(criteria: FilterCriteria, today: dt.date) -> tuple[dt.date, dt.date] | None:
    """Resolve the selected date range into inclusive bounds.

    Args:
        criteria: Criteria holding the date range selection.
        today: Current calendar date.

    Returns:
        Tuple of (start, end), or None when the selection cannot match
        anything (an incomplete or inverted custom range).
    """
    if criteria.date_range is DateRange.TODAY:
        return today, today
    if criteria.date_range is DateRange.WEEK:
        return week_bounds(today)
    if criteria.date_range is DateRange.MONTH:
        return month_bounds(today)

    start, end = criteria.date_from, criteria.date_to
    if start is None or end is None or start > end:
        return None
    return start, end


def matches_date_range(record: Record, criteria: FilterCriteria, today: dt.date) -> bool:
    """Check a record against the date range selector.

    Undated records only match the "all" range.
    """
    if criteria.date_range is DateRange.ALL:
        return True
    if record.date is None:
        return False

    bounds = date_range_bounds(criteria, today)
    if bounds is None:
        return False
    return is_within(record.date, *bounds)


def _date_key(record: Record) -> dt.date:
    return record.date or EPOCH


def _amount_key(record: Record) -> int:
    return abs(record.amount)


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _name_key(record: Record) -> tuple[str, str]:
    # Accents are ignored first, then break ties on the accented form
    folded = record.description.casefold()
    return _fold_accents(folded), folded


# Sort key -> (key function, reverse)
SORTERS: dict[SortKey, tuple[Callable[[Record], Any], bool]] = {
    SortKey.DATE_DESC: (_date_key, True),
    SortKey.DATE_ASC: (_date_key, False),
    SortKey.AMOUNT_DESC: (_amount_key, True),
    SortKey.AMOUNT_ASC: (_amount_key, False),
    SortKey.NAME_ASC: (_name_key, False),
    SortKey.NAME_DESC: (_name_key, True),
}


def sort_records(records: Iterable[Record], sort: SortKey) -> list[Record]:
    """Sort records by one of the six sort keys.

    Amounts compare by magnitude, so a -200 expense sorts above a 100 income
    in amount-desc. Ties keep ascending id order in both directions.

    Args:
        records: Records to sort.
        sort: Sort key.

    Returns:
        New sorted list.
    """
    key, reverse = SORTERS[sort]
    by_id = sorted(records, key=lambda r: r.id)
    return sorted(by_id, key=key, reverse=reverse)


def view(records: Iterable[Record], criteria: FilterCriteria, today: dt.date) -> list[Record]:
    """Compute the ordered visible subset of records.

    Search, category and date range filters are AND-ed together, then one
    sort is applied. An incomplete or inverted custom date range matches
    nothing; callers should reject it with validate_criteria() first.

    Args:
        records: Full record set (not modified).
        criteria: Current filter and sort selection.
        today: Current calendar date for relative date ranges.

    Returns:
        New list of visible records in display order.
    """
    visible = [
        record
        for record in records
        if matches_search(record, criteria.search)
        and matches_category(record, criteria.category)
        and matches_date_range(record, criteria, today)
    ]
    return sort_records(visible, criteria.sort)


def has_active_filters(criteria: FilterCriteria) -> bool:
    """Check if any filter (not the sort) differs from its default."""
    return (
        criteria.search.strip() != ""
        or criteria.category != CATEGORY_ALL
        or criteria.date_range is not DateRange.ALL
    )


def describe_results(count: int, total: int) -> str:
    """Describe how many records are visible.

    Args:
        count: Number of visible records.
        total: Number of records in the store.

    Returns:
        Text like "Showing all 3 transactions" or "Showing 1 of 3 transactions".
    """
    noun = "transaction" if total == 1 else "transactions"
    if count == total:
        return f"Showing all {total} {noun}"
    return f"Showing {count} of {total} {noun}"
