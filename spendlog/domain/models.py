"""Domain type definitions for spendlog.

These NewTypes provide semantic clarity and help with type checking:
- RecordId: Unique record identifier (creation time in milliseconds)
- Money: Amount in cents (minor units)
- CategoryName: Free-text category label
- Description: Record description text
"""

from typing import NewType

# Ids are minted from the creation timestamp in milliseconds
RecordId = NewType("RecordId", int)

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Category name, never empty once normalized
CategoryName = NewType("CategoryName", str)

# Record description text, trimmed and non-empty
Description = NewType("Description", str)
