"""Edit session: tracks whether the input form is adding or editing a record."""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from spendlog.domain.models import RecordId
from spendlog.domain.records import Record, RecordDraft, draft_from_record
from spendlog.errors import PersistenceError
from spendlog.logging_setup import get_logger

logger = get_logger(__name__)


class RecordWriter(Protocol):
    """The store operations an edit session commits through."""

    def create(
        self,
        description: str,
        amount: str | int | float | Decimal,
        date: dt.date | str | None = None,
        category: str | None = None,
    ) -> Record: ...

    def update(
        self,
        record_id: RecordId,
        description: str,
        amount: str | int | float | Decimal,
        date: dt.date | str | None = None,
        category: str | None = None,
    ) -> Record: ...


@dataclass(frozen=True)
class Idle:
    """No record is loaded; committing creates a new record."""


@dataclass(frozen=True)
class Editing:
    """A record is loaded; committing replaces its fields."""

    record_id: RecordId


SessionState = Idle | Editing


class EditSession:
    """Two-state machine: Idle <-> Editing(id).

    Idle -> Editing on begin_edit(), Editing -> Idle on a successful commit()
    or on cancel(). A commit that fails validation or hits a missing record
    leaves the state unchanged. A commit whose save fails with
    PersistenceError also returns to Idle: the change is already applied in
    memory, and retrying a create would duplicate it.
    """

    def __init__(self, store: RecordWriter) -> None:
        self._store = store
        self._state: SessionState = Idle()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return isinstance(self._state, Editing)

    def begin_edit(self, record: Record) -> RecordDraft:
        """Load a record for editing.

        Args:
            record: Record to edit.

        Returns:
            The record's current field values, for pre-filling the form.
        """
        self._state = Editing(record.id)
        logger.debug("Editing transaction %s", record.id)
        return draft_from_record(record)

    def commit(
        self,
        description: str,
        amount: str | int | float | Decimal,
        date: dt.date | str | None = None,
        category: str | None = None,
    ) -> Record:
        """Save the form fields, creating or updating depending on the state.

        Args:
            description: Description text.
            amount: Amount in major units (negative for expenses).
            date: Optional calendar date.
            category: Optional category.

        Returns:
            The created or updated record.

        Raises:
            ValidationError: If a field is invalid (state unchanged).
            NotFoundError: If the edited record no longer exists (state unchanged).
            PersistenceError: If saving failed. The in-memory change was
                applied, so the session still returns to Idle.
        """
        state = self._state
        try:
            if isinstance(state, Editing):
                record = self._store.update(state.record_id, description, amount, date, category)
            else:
                record = self._store.create(description, amount, date, category)
        except PersistenceError:
            self._state = Idle()
            raise

        self._state = Idle()
        return record

    def cancel(self) -> None:
        """Discard the current edit and return to Idle."""
        self._state = Idle()
