"""Tests for the spendlog command-line interface."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from spendlog.cli import app
from spendlog.config import get_config_path, load_settings
from spendlog.domain.models import Money
from spendlog.domain.records import Record
from spendlog.domain.view import SortKey
from spendlog.store.records import open_store
from spendlog.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("SPENDLOG_LOG_LEVEL", raising=False)
    return tmp_path


@pytest.fixture
def initialized() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output


def stored_records() -> list[Record]:
    return open_store(get_db_path()).list()


def add_scenario_records() -> None:
    lunch = runner.invoke(app, ["add", "Lunch", "--amount=-15", "--date", "2026-02-09", "--category", "Food"])
    salary = runner.invoke(app, ["add", "Salary", "--amount", "2000", "--date", "2026-02-01", "--category", "Income"])
    assert lunch.exit_code == 0, lunch.output
    assert salary.exit_code == 0, salary.output


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, isolated_home: Path) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_home / "data" / "spendlog" / "spendlog.db").exists()
        assert (isolated_home / "config" / "spendlog" / "config.toml").exists()

    def test_refuses_second_init(self, initialized: None) -> None:
        """Should fail without --force when already initialized."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_keeps_records(self, initialized: None) -> None:
        """Should reinitialize without losing stored transactions."""
        add_scenario_records()

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert len(stored_records()) == 2

    def test_force_repairs_invalid_config(self, initialized: None) -> None:
        """Should rewrite a config with a bad value instead of refusing to start."""
        config_path = get_config_path()
        config_path.write_text('default_sort = "bogus"\n')

        blocked = runner.invoke(app, ["list"])
        result = runner.invoke(app, ["init", "--force"])

        assert blocked.exit_code == 1
        assert "Invalid config" in blocked.output
        assert result.exit_code == 0, result.output
        assert load_settings().default_sort == SortKey.DATE_DESC

    def test_commands_require_init(self) -> None:
        """Should tell the user to run init first."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "spendlog init" in result.output


class TestAdd:
    """Tests for the add command."""

    def test_adds_transaction(self, initialized: None) -> None:
        """Should store a normalized transaction."""
        result = runner.invoke(app, ["add", "  Lunch ", "--amount=-15", "--date", "09/02/2026", "--category", "Food"])

        assert result.exit_code == 0
        assert "Transaction added" in result.output
        [record] = stored_records()
        assert record.description == "Lunch"
        assert record.amount == Money(-1500)
        assert record.date == date(2026, 2, 9)
        assert record.category == "Food"

    def test_defaults_date_to_today(self, initialized: None) -> None:
        """Should use today's date when none is given."""
        runner.invoke(app, ["add", "Coffee", "--amount=-3"])

        assert stored_records()[0].date == date.today()

    def test_no_date(self, initialized: None) -> None:
        """Should store without a date when asked."""
        runner.invoke(app, ["add", "Coffee", "--amount=-3", "--no-date"])

        assert stored_records()[0].date is None

    def test_rejects_non_numeric_amount(self, initialized: None) -> None:
        """Should fail and store nothing for a bad amount."""
        result = runner.invoke(app, ["add", "Coffee", "--amount", "three"])

        assert result.exit_code == 1
        assert "Amount must be a number" in result.output
        assert stored_records() == []

    def test_rejects_blank_description(self, initialized: None) -> None:
        """Should fail for a whitespace-only description."""
        result = runner.invoke(app, ["add", "   ", "--amount=-3"])

        assert result.exit_code == 1
        assert stored_records() == []


class TestListAndSummary:
    """Tests for list, summary and categories."""

    def test_lists_all(self, initialized: None) -> None:
        """Should show every transaction and the count."""
        add_scenario_records()

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Lunch" in result.output
        assert "Salary" in result.output
        assert "Showing all 2 transactions" in result.output

    def test_search(self, initialized: None) -> None:
        """Should filter by search text."""
        add_scenario_records()

        result = runner.invoke(app, ["list", "--search", "lunch"])

        assert result.exit_code == 0
        assert "Salary" not in result.output
        assert "Showing 1 of 2 transactions" in result.output

    def test_category_filter(self, initialized: None) -> None:
        """Should filter by exact category."""
        add_scenario_records()

        result = runner.invoke(app, ["list", "--category", "Income"])

        assert "Lunch" not in result.output
        assert "Showing 1 of 2 transactions" in result.output

    def test_inverted_custom_range_rejected(self, initialized: None) -> None:
        """Should reject from > to before computing a view."""
        add_scenario_records()

        result = runner.invoke(app, ["list", "--range", "custom", "--from", "2026-02-10", "--to", "2026-02-01"])

        assert result.exit_code == 1
        assert "Start date must be before end date" in result.output
        assert "Showing" not in result.output

    def test_incomplete_custom_range_rejected(self, initialized: None) -> None:
        """Should require both custom bounds."""
        result = runner.invoke(app, ["list", "--range", "custom", "--from", "2026-02-10"])

        assert result.exit_code == 1
        assert "both start and end dates" in result.output

    def test_empty_store(self, initialized: None) -> None:
        """Should say there is nothing to show."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No transactions found" in result.output

    def test_summary(self, initialized: None) -> None:
        """Should print balance, income and expense."""
        add_scenario_records()

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0
        assert "$1,985.00" in result.output
        assert "$2,000.00" in result.output
        assert "-$15.00" in result.output

    def test_categories(self, initialized: None) -> None:
        """Should list categories and the uncategorized option."""
        add_scenario_records()
        runner.invoke(app, ["add", "Taxi", "--amount=-9"])

        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 0
        assert "All Categories" in result.output
        assert "Food" in result.output
        assert "Uncategorized" in result.output


class TestEditAndDelete:
    """Tests for edit and delete."""

    def test_edit_with_options(self, initialized: None) -> None:
        """Should update every field given as an option."""
        add_scenario_records()
        lunch = next(r for r in stored_records() if r.description == "Lunch")

        result = runner.invoke(
            app,
            ["edit", str(lunch.id), "--description", "Dinner", "--amount=-30", "--date", "", "--category", ""],
        )

        assert result.exit_code == 0, result.output
        updated = next(r for r in stored_records() if r.id == lunch.id)
        assert updated.description == "Dinner"
        assert updated.amount == Money(-3000)
        assert updated.date is None
        assert updated.category is None

    def test_edit_prompts_with_current_values(self, initialized: None) -> None:
        """Should keep fields whose prompts are accepted as-is."""
        add_scenario_records()
        lunch = next(r for r in stored_records() if r.description == "Lunch")

        result = runner.invoke(app, ["edit", str(lunch.id), "--amount=-20"], input="\n\n\n")

        assert result.exit_code == 0, result.output
        updated = next(r for r in stored_records() if r.id == lunch.id)
        assert updated.amount == Money(-2000)
        assert updated.description == "Lunch"
        assert updated.date == date(2026, 2, 9)
        assert updated.category == "Food"

    def test_edit_unknown_id(self, initialized: None) -> None:
        """Should report a missing transaction."""
        result = runner.invoke(app, ["edit", "42", "--description", "x", "--amount", "1", "--date", "", "--category", ""])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit_invalid_amount_keeps_record(self, initialized: None) -> None:
        """Should leave the record unchanged on a validation error."""
        add_scenario_records()
        before = stored_records()
        lunch = next(r for r in before if r.description == "Lunch")

        result = runner.invoke(app, ["edit", str(lunch.id), "--amount", "lots"], input="\n\n\n")

        assert result.exit_code == 1
        assert stored_records() == before

    def test_delete(self, initialized: None) -> None:
        """Should remove the transaction."""
        add_scenario_records()
        lunch = next(r for r in stored_records() if r.description == "Lunch")

        result = runner.invoke(app, ["delete", str(lunch.id), "--yes"])

        assert result.exit_code == 0
        assert [r.description for r in stored_records()] == ["Salary"]

    def test_delete_asks_for_confirmation(self, initialized: None) -> None:
        """Should keep the transaction when the prompt is declined."""
        add_scenario_records()
        lunch = next(r for r in stored_records() if r.description == "Lunch")

        result = runner.invoke(app, ["delete", str(lunch.id)], input="n\n")

        assert result.exit_code == 0
        assert len(stored_records()) == 2

    def test_delete_unknown_id(self, initialized: None) -> None:
        """Should report a missing transaction."""
        result = runner.invoke(app, ["delete", "42", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output
