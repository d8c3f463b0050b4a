"""Tests for spendlog.store.records.RecordStore."""

from datetime import date
from pathlib import Path

import pytest

from spendlog.domain.models import Money, RecordId
from spendlog.errors import NotFoundError, PersistenceError, ValidationError
from spendlog.store.persistence import RecordPersistence
from spendlog.store.records import RecordStore, open_store
from spendlog.store.schema import init_database
from spendlog.store.storage import MemoryStorage


class FailingStorage(MemoryStorage):
    """Storage whose writes can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def set(self, key: str, value: str) -> None:
        if self.fail:
            raise PersistenceError("quota exceeded")
        super().set(key, value)


def fixed_clock(value: int = 1000):
    return lambda: value


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> RecordStore:
    ticks = iter(range(1000, 2000, 10))
    return RecordStore(RecordPersistence(storage), clock=lambda: next(ticks))


class TestCreate:
    """Tests for RecordStore.create."""

    def test_creates_normalized_record(self, store: RecordStore) -> None:
        """Should trim text, parse amount and date, and drop blank categories."""
        record = store.create("  Lunch ", "-15", "2026-02-09", "   ")

        assert record.id == RecordId(1000)
        assert record.description == "Lunch"
        assert record.amount == Money(-1500)
        assert record.date == date(2026, 2, 9)
        assert record.category is None
        assert store.list() == [record]

    def test_ids_are_unique_when_clock_stalls(self, storage: MemoryStorage) -> None:
        """Should mint increasing ids even within the same millisecond."""
        store = RecordStore(RecordPersistence(storage), clock=fixed_clock(1000))

        first = store.create("a", "1")
        second = store.create("b", "2")

        assert (first.id, second.id) == (1000, 1001)

    def test_ids_stay_above_loaded_ids(self, storage: MemoryStorage) -> None:
        """Should never reuse an id already in storage, even if the clock is behind."""
        RecordStore(RecordPersistence(storage), clock=fixed_clock(5000)).create("old", "1")

        store = RecordStore(RecordPersistence(storage), clock=fixed_clock(10))
        record = store.create("new", "1")

        assert record.id == 5001

    def test_empty_description_raises(self, store: RecordStore, storage: MemoryStorage) -> None:
        """Should reject blank descriptions and store nothing."""
        with pytest.raises(ValidationError):
            store.create("   ", "-15")

        assert store.list() == []
        assert storage.data == {}

    def test_non_numeric_amount_raises(self, store: RecordStore) -> None:
        """Should reject amounts that are not numbers."""
        with pytest.raises(ValidationError):
            store.create("Lunch", "fifteen")

        assert len(store) == 0

    def test_persists_after_create(self, store: RecordStore, storage: MemoryStorage) -> None:
        """Should save the full set under the storage key."""
        record = store.create("Lunch", "-15")

        assert RecordPersistence(storage).load() == [record]


class TestUpdate:
    """Tests for RecordStore.update."""

    def test_replaces_fields_and_keeps_id(self, store: RecordStore, storage: MemoryStorage) -> None:
        """Should replace everything except the id and persist."""
        record = store.create("Lunch", "-15", "2026-02-09", "Food")

        updated = store.update(record.id, "Dinner", "-30", None, "")

        assert updated.id == record.id
        assert updated.description == "Dinner"
        assert updated.amount == Money(-3000)
        assert updated.date is None
        assert updated.category is None
        assert RecordPersistence(storage).load() == [updated]

    def test_unknown_id_raises_and_leaves_store_unchanged(self, store: RecordStore) -> None:
        """Should raise NotFoundError without touching anything."""
        record = store.create("Lunch", "-15")

        with pytest.raises(NotFoundError) as exc_info:
            store.update(RecordId(42), "Dinner", "-30")

        assert exc_info.value.record_id == 42
        assert store.list() == [record]

    def test_invalid_fields_leave_record_unchanged(self, store: RecordStore) -> None:
        """Should not apply a partially valid update."""
        record = store.create("Lunch", "-15")

        with pytest.raises(ValidationError):
            store.update(record.id, "Dinner", "NaN")

        assert store.get(record.id) == record


class TestDelete:
    """Tests for RecordStore.delete."""

    def test_removes_record(self, store: RecordStore, storage: MemoryStorage) -> None:
        """Should remove the record and persist."""
        lunch = store.create("Lunch", "-15")
        salary = store.create("Salary", "2000")

        store.delete(lunch.id)

        assert store.list() == [salary]
        assert RecordPersistence(storage).load() == [salary]

    def test_unknown_id_raises(self, store: RecordStore) -> None:
        """Should raise NotFoundError for a missing id."""
        record = store.create("Lunch", "-15")

        with pytest.raises(NotFoundError):
            store.delete(RecordId(42))

        assert store.list() == [record]

    def test_get_after_delete_raises(self, store: RecordStore) -> None:
        """Should no longer find the deleted record."""
        record = store.create("Lunch", "-15")
        store.delete(record.id)

        with pytest.raises(NotFoundError):
            store.get(record.id)


class TestSaveFailure:
    """Tests for save failures."""

    def test_keeps_in_memory_changes(self) -> None:
        """Should raise PersistenceError but keep the new record."""
        storage = FailingStorage()
        store = RecordStore(RecordPersistence(storage), clock=fixed_clock())
        storage.fail = True

        with pytest.raises(PersistenceError):
            store.create("Lunch", "-15")

        assert [record.description for record in store.list()] == ["Lunch"]


class TestList:
    """Tests for RecordStore.list."""

    def test_returns_snapshot(self, store: RecordStore) -> None:
        """Should return a copy that later mutations don't affect."""
        store.create("Lunch", "-15")
        snapshot = store.list()

        store.create("Salary", "2000")

        assert len(snapshot) == 1
        assert len(store.list()) == 2

    def test_loads_existing_records(self, storage: MemoryStorage) -> None:
        """Should see records saved by an earlier store on the same storage."""
        record = RecordStore(RecordPersistence(storage), clock=fixed_clock()).create("Lunch", "-15")

        assert RecordStore(RecordPersistence(storage)).list() == [record]


class TestOpenStore:
    """Tests for open_store."""

    def test_round_trip_through_sqlite(self, tmp_path: Path) -> None:
        """Should persist records in the SQLite database."""
        db_path = tmp_path / "spendlog.db"
        init_database(db_path)

        record = open_store(db_path).create("Lunch", "-15", "2026-02-09", "Food")

        assert open_store(db_path).list() == [record]
        assert open_store(db_path, key="other").list() == []
