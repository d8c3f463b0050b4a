"""Persistence adapter: the whole record list as one JSON blob under one key.

The on-disk shape matches the legacy browser storage format, one object
per record: {id, description, amount, date, category} with amount in major
units, or a decimal string for amounts too large for a float. Blanks
("" or null) mean "no date" / "no category".
"""

import json
from collections.abc import Iterable
from typing import Any

from spendlog.domain.models import Money, RecordId
from spendlog.domain.records import (
    Record,
    apply_draft,
    build_draft,
    to_major_units,
)
from spendlog.errors import PersistenceError, ValidationError
from spendlog.logging_setup import get_logger
from spendlog.store.storage import KeyValueStorage

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "transactions"

# Beyond 15 significant digits a float no longer round-trips every cent
MAX_FLOAT_CENTS = 10**15


def _amount_to_json(amount: Money) -> float | str:
    major = to_major_units(amount)
    if abs(amount) < MAX_FLOAT_CENTS:
        return float(major)
    return str(major)


def record_to_dict(record: Record) -> dict[str, Any]:
    """Convert a record to its JSON-ready dictionary."""
    return {
        "id": record.id,
        "description": record.description,
        "amount": _amount_to_json(record.amount),
        "date": record.date.isoformat() if record.date else None,
        "category": record.category,
    }


def record_from_dict(raw: Any) -> Record:
    """Rebuild a record from a stored dictionary.

    Args:
        raw: Decoded JSON object.

    Returns:
        Validated record.

    Raises:
        ValidationError: If the entry is not a well-formed record.
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"Expected an object, got {type(raw).__name__}")

    record_id = raw.get("id")
    if not isinstance(record_id, int) or isinstance(record_id, bool):
        raise ValidationError(f"Invalid id {record_id!r}")

    description = raw.get("description")
    if not isinstance(description, str):
        raise ValidationError(f"Invalid description {description!r}")

    amount = raw.get("amount")
    if not isinstance(amount, (int, float, str)) or isinstance(amount, bool):
        raise ValidationError(f"Invalid amount {amount!r}")

    date = raw.get("date")
    if date is not None and not isinstance(date, str):
        raise ValidationError(f"Invalid date {date!r}")

    category = raw.get("category")
    if category is not None and not isinstance(category, str):
        raise ValidationError(f"Invalid category {category!r}")

    draft = build_draft(description, amount, date, category)
    return apply_draft(RecordId(record_id), draft)


def serialize_records(records: Iterable[Record]) -> str:
    """Serialize records to a JSON array."""
    return json.dumps([record_to_dict(record) for record in records])


def deserialize_records(text: str) -> list[Record]:
    """Parse a JSON array of records.

    Malformed entries and repeated ids are skipped with a warning.

    Args:
        text: Stored JSON text.

    Returns:
        Records in stored order.

    Raises:
        ValueError: If the text is not JSON or not an array.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")

    records: list[Record] = []
    seen: set[RecordId] = set()
    for index, raw in enumerate(data):
        try:
            record = record_from_dict(raw)
        except ValidationError as e:
            logger.warning("Skipping stored entry %d: %s", index, e)
            continue

        if record.id in seen:
            logger.warning("Skipping stored entry %d: duplicate id %s", index, record.id)
            continue

        seen.add(record.id)
        records.append(record)

    return records


class RecordPersistence:
    """Loads and saves the record list under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[Record]:
        """Load stored records.

        Never raises: missing, unreadable or corrupt data loads as an empty list.

        Returns:
            Stored records, or an empty list.
        """
        try:
            text = self.storage.get(self.key)
        except PersistenceError as e:
            logger.warning("Could not load transactions, starting empty: %s", e)
            return []

        if text is None:
            return []

        try:
            return deserialize_records(text)
        except ValueError as e:
            logger.warning("Stored transactions are corrupt, starting empty: %s", e)
            return []

    def save(self, records: Iterable[Record]) -> None:
        """Replace the stored record list.

        Args:
            records: Full record set.

        Raises:
            PersistenceError: If the storage backend rejects the write.
        """
        self.storage.set(self.key, serialize_records(records))
