"""Record store: owns the in-memory record set and persists every change."""

import datetime as dt
import time
from collections.abc import Callable
from decimal import Decimal
from pathlib import Path

from spendlog.domain.models import RecordId
from spendlog.domain.records import Record, apply_draft, build_draft
from spendlog.errors import NotFoundError, PersistenceError
from spendlog.logging_setup import get_logger
from spendlog.store.persistence import DEFAULT_STORAGE_KEY, RecordPersistence
from spendlog.store.storage import SqliteStorage

logger = get_logger(__name__)


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


class RecordStore:
    """Single owner of the record set.

    Records are loaded once at construction. Every create, update and delete
    saves the full set through the persistence adapter. If saving fails the
    in-memory change is kept and PersistenceError is raised to the caller.
    """

    def __init__(self, persistence: RecordPersistence, clock: Callable[[], int] = now_ms) -> None:
        self._persistence = persistence
        self._clock = clock
        self._records: dict[RecordId, Record] = {record.id: record for record in persistence.load()}
        self._last_id = max(self._records, default=0)

    def __len__(self) -> int:
        return len(self._records)

    def _mint_id(self) -> RecordId:
        # Creation timestamp, bumped if the clock has not moved past the last id
        record_id = max(self._clock(), self._last_id + 1)
        self._last_id = record_id
        return RecordId(record_id)

    def _persist(self) -> None:
        try:
            self._persistence.save(self._records.values())
        except PersistenceError as e:
            logger.error("Changes may not persist: %s", e)
            raise

    def create(
        self,
        description: str,
        amount: str | int | float | Decimal,
        date: dt.date | str | None = None,
        category: str | None = None,
    ) -> Record:
        """Add a new record with a freshly minted id.

        Args:
            description: Description text (trimmed, must be non-empty).
            amount: Amount in major units (negative for expenses).
            date: Optional calendar date.
            category: Optional category (blank means no category).

        Returns:
            The created record.

        Raises:
            ValidationError: If a field is invalid. Nothing is stored.
            PersistenceError: If saving failed. The record is kept in memory.
        """
        draft = build_draft(description, amount, date, category)
        record = apply_draft(self._mint_id(), draft)
        self._records[record.id] = record
        logger.debug("Created transaction %s", record.id)
        self._persist()
        return record

    def update(
        self,
        record_id: RecordId,
        description: str,
        amount: str | int | float | Decimal,
        date: dt.date | str | None = None,
        category: str | None = None,
    ) -> Record:
        """Replace every field of a record except its id.

        Raises:
            NotFoundError: If no record has this id. Nothing changes.
            ValidationError: If a field is invalid. Nothing changes.
            PersistenceError: If saving failed. The update is kept in memory.
        """
        if record_id not in self._records:
            raise NotFoundError(record_id)

        draft = build_draft(description, amount, date, category)
        record = apply_draft(record_id, draft)
        self._records[record_id] = record
        logger.debug("Updated transaction %s", record_id)
        self._persist()
        return record

    def delete(self, record_id: RecordId) -> None:
        """Remove a record.

        Raises:
            NotFoundError: If no record has this id.
            PersistenceError: If saving failed. The record stays deleted in memory.
        """
        if record_id not in self._records:
            raise NotFoundError(record_id)

        del self._records[record_id]
        logger.debug("Deleted transaction %s", record_id)
        self._persist()

    def get(self, record_id: RecordId) -> Record:
        """Look up a record by id.

        Raises:
            NotFoundError: If no record has this id.
        """
        try:
            return self._records[record_id]
        except KeyError:
            raise NotFoundError(record_id) from None

    def list(self) -> list[Record]:
        """Return a snapshot of all records. Callers must not rely on the order."""
        return list(self._records.values())


def open_store(db_path: Path | None = None, key: str = DEFAULT_STORAGE_KEY) -> RecordStore:
    """Open the record store backed by the SQLite key-value database.

    Args:
        db_path: Path to the database file. If None, uses default location.
        key: Storage key holding the record list.

    Returns:
        RecordStore with records loaded.
    """
    return RecordStore(RecordPersistence(SqliteStorage(db_path), key))
