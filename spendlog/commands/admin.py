"""Admin commands for init and listing transactions."""

import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spendlog.config import Settings, create_default_config, get_config_path, load_settings
from spendlog.dates import parse_user_date
from spendlog.domain.records import Record, format_money
from spendlog.domain.view import (
    DateRange,
    FilterCriteria,
    SortKey,
    describe_results,
    has_active_filters,
    validate_criteria,
    view,
)
from spendlog.errors import ValidationError
from spendlog.store.records import RecordStore, open_store
from spendlog.store.schema import database_exists, get_db_path, init_database

console = Console()


def load_settings_or_exit() -> Settings:
    """Load settings, exiting with an error message if the config is invalid."""
    try:
        return load_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid config ({get_config_path()}): {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def open_store_or_exit(settings: Settings) -> RecordStore:
    """Open the record store, exiting if spendlog has not been initialized."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendlog init' first.[/red]", style="bold")
        sys.exit(1)
    return open_store(db_path, settings.storage_key)


def render_records_table(records: list[Record], title: str, currency_symbol: str) -> Table:
    """Build a table of records in display order.

    Args:
        records: Records to show.
        title: Table title.
        currency_symbol: Symbol for amounts.

    Returns:
        Rich table ready to print.
    """
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for record in records:
        amount = format_money(record.amount, currency_symbol, include_sign=True)
        amount_display = f"[green]{amount}[/green]" if record.is_income else f"[red]{amount}[/red]"
        record_date = record.date.isoformat() if record.date else "[dim]-[/dim]"
        category = escape(record.category) if record.category else "[dim]-[/dim]"

        table.add_row(str(record.id), record_date, escape(record.description), category, amount_display)

    return table


def init_command(force: bool = False) -> None:
    """Initialize spendlog database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    try:
        if not force and database_exists(db_path):
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Database already exists: {db_path}")
            console.print("\n[yellow]Use 'spendlog init --force' to recreate the config[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        if force or not config_path.exists():
            create_default_config(config_path)
            console.print(f"[green]✓[/green] Config file created at {config_path} (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def build_criteria(
    search: str,
    category: str,
    date_range: DateRange,
    date_from: str | None,
    date_to: str | None,
    sort: SortKey,
) -> FilterCriteria:
    """Build and validate criteria from command-line options.

    Raises:
        ValidationError: If a date is unparseable or the custom range is incomplete or inverted.
    """
    criteria = FilterCriteria(
        search=search,
        category=category,
        date_range=date_range,
        date_from=parse_user_date(date_from) if date_from else None,
        date_to=parse_user_date(date_to) if date_to else None,
        sort=sort,
    )
    validate_criteria(criteria)
    return criteria


def list_command(
    search: str = "",
    category: str = "all",
    date_range: DateRange = DateRange.ALL,
    date_from: str | None = None,
    date_to: str | None = None,
    sort: SortKey | None = None,
) -> None:
    """List transactions matching the search and filters."""
    settings = load_settings_or_exit()

    try:
        criteria = build_criteria(search, category, date_range, date_from, date_to, sort or settings.default_sort)
    except ValidationError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    store = open_store_or_exit(settings)
    records = store.list()
    visible = view(records, criteria, date.today())

    if not records:
        console.print("[yellow]No transactions found[/yellow]")
        return

    if visible:
        console.print(render_records_table(visible, "Transactions", settings.currency_symbol))
    else:
        console.print("[yellow]No transactions match the current filters[/yellow]")

    console.print(f"[dim]{describe_results(len(visible), len(records))}[/dim]")
    if has_active_filters(criteria):
        console.print("[dim]Filters active (omit --search, --category and --range to show everything)[/dim]")
