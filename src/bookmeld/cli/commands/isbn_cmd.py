# ABOUTME: The `bookmeld isbn` command for checking and converting ISBNs offline.
# ABOUTME: Prints the canonical ISBN-10/ISBN-13 pair and any validation notes.

import click
from rich.console import Console
from rich.table import Table

from bookmeld.metadata.isbn import resolve_isbn
from bookmeld.metadata.types import BookQuery


@click.command("isbn")
@click.option("--isbn10", default=None, help="Raw ISBN-10 (hyphens and spaces allowed).")
@click.option("--isbn13", default=None, help="Raw ISBN-13 (hyphens and spaces allowed).")
def isbn(isbn10: str | None, isbn13: str | None) -> None:
    """Validate ISBNs and derive the missing half of the pair."""
    console = Console()
    if not isbn10 and not isbn13:
        console.print("[red]Error:[/red] pass --isbn10 and/or --isbn13")
        raise SystemExit(1)

    data = resolve_isbn(BookQuery(isbn10_raw=isbn10, isbn13_raw=isbn13))

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=10)
    table.add_column("Value")
    table.add_row("ISBN-10", data.isbn10 or "[dim]none[/dim]")
    table.add_row("ISBN-13", data.isbn13 or "[dim]none[/dim]")
    for note in data.notes:
        table.add_row("Note", f"[yellow]{note}[/yellow]")
    console.print(table)
