"""CLI entry point for spendlog."""

import os

import typer

from spendlog.commands.admin import init_command, list_command
from spendlog.commands.report import categories_command, summary_command
from spendlog.commands.transactions import add_command, delete_command, edit_command
from spendlog.config import DEFAULT_CONFIG, load_settings
from spendlog.domain.view import DateRange, SortKey
from spendlog.errors import ValidationError
from spendlog.logging_setup import configure_logging

app = typer.Typer(
    name="spendlog",
    help="spendlog - A simple income and expense tracker",
    add_completion=False,
)


def _configured_log_level() -> str:
    # A broken config must not block "init --force" from rewriting it
    try:
        return load_settings().log_level
    except ValidationError:
        return DEFAULT_CONFIG["log_level"]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """spendlog - A simple income and expense tracker."""
    if verbose:
        configure_logging("DEBUG")
    else:
        configure_logging(os.getenv("SPENDLOG_LOG_LEVEL") or _configured_log_level())


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Reinitialize and overwrite the config"),
) -> None:
    """Initialize spendlog database and configuration."""
    init_command(force)


@app.command()
def add(
    description: str,
    amount: str = typer.Option(..., "--amount", "-a", help="Amount (negative for expenses, e.g. --amount=-15)"),
    date: str = typer.Option(None, "--date", "-d", help="Date (default: today)"),
    category: str = typer.Option(None, "--category", "-c", help="Category"),
    no_date: bool = typer.Option(False, "--no-date", help="Store without a date"),
) -> None:
    """Add an income or expense transaction."""
    add_command(description, amount, date, category, no_date)


@app.command()
def edit(
    record_id: int,
    description: str = typer.Option(None, "--description", help="New description"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    date: str = typer.Option(None, "--date", "-d", help="New date (empty to clear)"),
    category: str = typer.Option(None, "--category", "-c", help="New category (empty to clear)"),
) -> None:
    """Edit a transaction, prompting for any field not given."""
    edit_command(record_id, description, amount, date, category)


@app.command()
def delete(
    record_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(record_id, yes)


@app.command(name="list")
def list_transactions(
    search: str = typer.Option("", "--search", "-s", help="Match description or category text"),
    category: str = typer.Option("all", "--category", "-c", help="'all', 'uncategorized' or a category name"),
    date_range: DateRange = typer.Option(DateRange.ALL, "--range", "-r", help="Date range"),
    date_from: str = typer.Option(None, "--from", help="Start date for --range custom"),
    date_to: str = typer.Option(None, "--to", help="End date for --range custom"),
    sort: SortKey = typer.Option(None, "--sort", help="Sort order (default from config: date-desc)"),
) -> None:
    """List your transactions."""
    list_command(search, category, date_range, date_from, date_to, sort)


@app.command()
def summary() -> None:
    """Show your balance, income and expense totals."""
    summary_command()


@app.command()
def categories() -> None:
    """Show the categories you can filter by."""
    categories_command()


if __name__ == "__main__":
    app()
