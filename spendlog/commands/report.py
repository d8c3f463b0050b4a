"""Summary and category commands."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spendlog.commands.admin import load_settings_or_exit, open_store_or_exit
from spendlog.domain.records import format_money
from spendlog.domain.summary import category_index, category_options, summarize
from spendlog.domain.view import CATEGORY_ALL, CATEGORY_UNCATEGORIZED

console = Console()

OPTION_LABELS = {
    CATEGORY_ALL: "All Categories",
    CATEGORY_UNCATEGORIZED: "Uncategorized",
}


def summary_command() -> None:
    """Show balance, income and expense over all transactions."""
    settings = load_settings_or_exit()
    store = open_store_or_exit(settings)
    summary = summarize(store.list())
    symbol = settings.currency_symbol

    balance_style = "red" if summary.balance < 0 else "green"

    console.print(f"[bold]Balance:[/bold] [{balance_style}]{format_money(summary.balance, symbol)}[/{balance_style}]")
    console.print(f"[bold]Income:[/bold]  [green]{format_money(summary.income, symbol)}[/green]")
    console.print(f"[bold]Expense:[/bold] [red]{format_money(summary.expense, symbol)}[/red]")


def categories_command() -> None:
    """Show the category filter options."""
    settings = load_settings_or_exit()
    store = open_store_or_exit(settings)
    options = category_options(category_index(store.list()))

    table = Table(title="Category filters")
    table.add_column("Value", style="cyan")
    table.add_column("Label", style="white")

    for option in options:
        table.add_row(escape(option), escape(OPTION_LABELS.get(option, option)))

    console.print(table)
    console.print("[dim]Use a value with 'spendlog list --category'[/dim]")
