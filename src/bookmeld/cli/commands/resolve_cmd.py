# ABOUTME: The `bookmeld resolve` command for resolving every book in a book list.
# ABOUTME: Runs the source cascade per book and prints the merged records and lookup failures.

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookmeld.cli.options import api_key_option
from bookmeld.config import ConfigError, load_book_list
from bookmeld.metadata.http import BookmeldHttpClient, HttpClient
from bookmeld.metadata.reconciler import MetadataReconciler, create_reconciler
from bookmeld.metadata.types import Resolution

logger = logging.getLogger(__name__)


def _create_reconciler(http_client: HttpClient, api_key: str | None) -> MetadataReconciler:
    """Create the default reconciler (Google Books, then Open Library)."""
    return create_reconciler(http_client, api_key=api_key)


def _render_resolution(console: Console, resolution: Resolution) -> None:
    meta = resolution.metadata
    table = Table(title=escape(meta.title or "Unknown title"), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold", width=12)
    table.add_column("Value")

    table.add_row("Author", escape(meta.author) if meta.author else "[dim]unknown[/dim]")
    table.add_row("Pages", str(meta.page_count) if meta.page_count else "[dim]unknown[/dim]")
    table.add_row("ISBN-10", meta.isbn10 or "[dim]none[/dim]")
    table.add_row("ISBN-13", meta.isbn13 or "[dim]none[/dim]")
    if meta.has_cover:
        table.add_row("Cover", escape(meta.cover))
        table.add_row("Cover Rank", str(meta.cover_rank or 0))
    else:
        table.add_row("Cover", "[dim]Cover not available yet.[/dim]")
    if meta.isbn_notes:
        table.add_row("ISBN Notes", ", ".join(meta.isbn_notes))
    if meta.quotes:
        table.add_row("Quotes", str(len(meta.quotes)))

    console.print(table)
    for error in resolution.errors:
        console.print(
            f"  [yellow]{escape(error.message)}[/yellow] [dim]({escape(str(error.cause))})[/dim]"
        )


@click.command("resolve")
@click.argument("book_list", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@api_key_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print results as JSON.")
def resolve(book_list: Path, api_key: str | None, as_json: bool) -> None:
    """Resolve metadata for every book in a JSON book list."""
    console = Console()

    try:
        config = load_book_list(book_list)
    except ConfigError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    if not config.books:
        console.print("[yellow]No books configured.[/yellow]")
        return

    resolutions: list[Resolution] = []
    with BookmeldHttpClient() as http_client:
        reconciler = _create_reconciler(http_client, api_key or config.api_key)
        for query in config.books:
            logger.debug("Resolving %r", query.display_id)
            resolutions.append(reconciler.resolve(query))

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in resolutions], indent=2))
        return

    for resolution in resolutions:
        _render_resolution(console, resolution)

    failed = sum(len(r.errors) for r in resolutions)
    console.print(
        f"\n[dim]{len(resolutions)} book(s) resolved, {failed} lookup failure(s)[/dim]"
    )
