"""Domain models and types for spendlog.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from spendlog.domain.models import CategoryName, Description, Money, RecordId

__all__ = ["Money", "RecordId", "CategoryName", "Description"]
