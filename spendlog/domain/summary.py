"""Pure functions for totals and the category index.

This module contains the functional core for aggregate data:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Totals always cover the full record set, never a filtered view.
All monetary amounts are in cents (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from spendlog.domain.models import CategoryName, Money
from spendlog.domain.records import Record
from spendlog.domain.view import CATEGORY_ALL, CATEGORY_UNCATEGORIZED


@dataclass(frozen=True)
class Summary:
    """Immutable balance, income and expense totals."""

    balance: Money
    income: Money
    expense: Money  # Zero or negative


@dataclass(frozen=True)
class CategoryIndex:
    """Immutable set of categories in use."""

    categories: list[CategoryName]
    has_uncategorized: bool


def summarize(records: Iterable[Record]) -> Summary:
    """Calculate totals over every record.

    Zero amounts count towards neither income nor expense.

    Args:
        records: Full record set.

    Returns:
        Summary where balance == income + expense.
    """
    income = 0
    expense = 0
    for record in records:
        if record.amount > 0:
            income += record.amount
        elif record.amount < 0:
            expense += record.amount

    return Summary(
        balance=Money(income + expense),
        income=Money(income),
        expense=Money(expense),
    )


def category_index(records: Iterable[Record]) -> CategoryIndex:
    """Collect distinct category names, sorted, plus whether any record lacks one.

    Args:
        records: Full record set.

    Returns:
        CategoryIndex for building the category selector.
    """
    names: set[CategoryName] = set()
    has_uncategorized = False

    for record in records:
        category = record.category.strip() if record.category else ""
        if category:
            names.add(CategoryName(category))
        else:
            has_uncategorized = True

    return CategoryIndex(categories=sorted(names), has_uncategorized=has_uncategorized)


def category_options(index: CategoryIndex) -> list[str]:
    """Build the category selector options.

    "uncategorized" is only offered alongside at least one named category.

    Args:
        index: Category index of the full record set.

    Returns:
        List of selector values starting with "all".
    """
    options = [CATEGORY_ALL, *index.categories]
    if index.categories and index.has_uncategorized:
        options.append(CATEGORY_UNCATEGORIZED)
    return options

