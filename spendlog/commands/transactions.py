"""Transaction management commands (add, edit, delete)."""

import sys
from datetime import date

import typer
from rich.console import Console
from rich.markup import escape

from spendlog.commands.admin import load_settings_or_exit, open_store_or_exit
from spendlog.dates import parse_user_date
from spendlog.domain.models import RecordId
from spendlog.domain.records import Record, format_money, to_major_units
from spendlog.errors import NotFoundError, PersistenceError, ValidationError
from spendlog.session import EditSession

console = Console()


def resolve_date(raw_date: str | None) -> date | None:
    """Parse an optional date option, blank meaning "no date"."""
    if raw_date is None or not raw_date.strip():
        return None
    return parse_user_date(raw_date)


def print_record(record: Record, currency_symbol: str) -> None:
    """Print the fields of a record."""
    console.print(f"  ID: {record.id}")
    console.print(f"  Description: {escape(record.description)}")
    console.print(f"  Amount: {format_money(record.amount, currency_symbol, include_sign=True)}")
    console.print(f"  Date: {record.date.isoformat() if record.date else '-'}")
    console.print(f"  Category: {escape(record.category or '-')}")


def add_command(
    description: str,
    amount: str,
    date_text: str | None = None,
    category: str | None = None,
    no_date: bool = False,
) -> None:
    """Add a transaction.

    Args:
        description: Transaction description.
        amount: Amount (negative for expenses, positive for income).
        date_text: Transaction date in any common format. Defaults to today.
        category: Optional category name.
        no_date: Store the transaction without a date.
    """
    settings = load_settings_or_exit()
    store = open_store_or_exit(settings)
    session = EditSession(store)

    try:
        if no_date:
            record_date = None
        elif date_text is None:
            record_date = date.today()
        else:
            record_date = resolve_date(date_text)

        record = session.commit(description, amount, record_date, category)

    except ValidationError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except PersistenceError as e:
        console.print(f"[red]Changes may not persist: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction added:")
    print_record(record, settings.currency_symbol)


def edit_command(
    record_id: int,
    description: str | None = None,
    amount: str | None = None,
    date_text: str | None = None,
    category: str | None = None,
) -> None:
    """Edit a transaction.

    Fields not given as options are prompted for, with the current value as
    the default.

    Args:
        record_id: Transaction ID (from 'spendlog list').
        description: New description.
        amount: New amount.
        date_text: New date (blank clears it).
        category: New category (blank clears it).
    """
    settings = load_settings_or_exit()
    store = open_store_or_exit(settings)
    session = EditSession(store)

    try:
        current = session.begin_edit(store.get(RecordId(record_id)))
    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if description is None:
        description = typer.prompt("Description", default=current.description)
    if amount is None:
        amount = typer.prompt("Amount", default=f"{to_major_units(current.amount):.2f}")
    if date_text is None:
        date_text = typer.prompt("Date", default=current.date.isoformat() if current.date else "")
    if category is None:
        category = typer.prompt("Category", default=current.category or "")

    try:
        record = session.commit(description, amount, resolve_date(date_text), category)

    except (ValidationError, NotFoundError) as e:
        session.cancel()
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except PersistenceError as e:
        console.print(f"[red]Changes may not persist: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction updated:")
    print_record(record, settings.currency_symbol)


def delete_command(record_id: int, yes: bool = False) -> None:
    """Delete a transaction.

    Args:
        record_id: Transaction ID (from 'spendlog list').
        yes: Skip the confirmation prompt.
    """
    settings = load_settings_or_exit()
    store = open_store_or_exit(settings)

    try:
        record = store.get(RecordId(record_id))
        if not yes:
            amount = format_money(record.amount, settings.currency_symbol, include_sign=True)
            if not typer.confirm(f"Delete '{record.description}' ({amount})?", default=False):
                console.print("[dim]Cancelled[/dim]")
                return

        store.delete(record.id)

    except NotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    except PersistenceError as e:
        console.print(f"[red]Changes may not persist: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted transaction {record_id}")
