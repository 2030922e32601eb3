"""Command line interface for PostFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from postfinder.config import AppConfig
from postfinder.index.mutations import demote as demote_post
from postfinder.index.mutations import promote as promote_post
from postfinder.index.search import Query, available_types, draft_entries
from postfinder.index.statistics import format_count
from postfinder.index.store import CollectionStore
from postfinder.models import CONTENT_TYPES, STATUSES, Document
from postfinder.views import DocumentRow, Row, build_rows, render_row

console = Console()
app = typer.Typer(help="PostFinder - index, filter and summarise MDX posts")

_FRESHNESS_STYLES = {"fresh": "green", "stale": "red", "default": "yellow"}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_store(root: Path, max_workers: int) -> CollectionStore:
    config = AppConfig(root=root, max_workers=max_workers)
    store = CollectionStore(config.resolve_root(Path.cwd()), config=config)
    result = store.rebuild()
    if result.error is not None:
        console.print(f"[red]{escape(result.error)}[/red]")
        raise typer.Exit(code=1)
    if result.stats.failed:
        console.print(f"[yellow]Skipped {result.stats.failed} unreadable posts.[/yellow]")
    return store


def _build_query(
    text: Optional[str],
    status: Optional[str],
    content_type: Optional[str],
    since: Optional[str],
    until: Optional[str],
) -> Query:
    query = Query.from_strings(
        text=text, status=status, content_type=content_type, since=since, until=until
    )
    if query.status is not None and not query.status_active:
        console.print(
            f"[yellow]Ignoring unknown status {status!r} "
            f"(expected one of {', '.join(STATUSES)}).[/yellow]"
        )
    if query.type is not None and not query.type_active:
        console.print(
            f"[yellow]Ignoring unknown type {content_type!r} "
            f"(expected one of {', '.join(CONTENT_TYPES)}).[/yellow]"
        )
    if query.start is not None and query.end is not None and not query.range_active:
        console.print("[yellow]Ignoring date range: start is after end.[/yellow]")
    return query


def _print_documents(documents: List[Document], query: Query, grouped: bool) -> None:
    _print_rows(build_rows(documents, grouped=grouped), len(documents), query)


def _print_rows(rows: List[Row], count: int, query: Query) -> None:
    if not count:
        console.print("[yellow]No matching posts.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Status")
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Words", justify="right")
    table.add_column("Modified")

    for row in rows:
        cells = tuple(escape(cell) for cell in render_row(row))
        if row.kind == "section":
            table.add_row(*cells, style="bold")
            continue
        style = _FRESHNESS_STYLES.get(cells[0]) if row.kind == "document" else None
        table.add_row(*cells, style=style)

    console.print(table)
    filters = ", ".join(f"{label}: {value}" for label, value in query.describe())
    suffix = f" ({filters})" if filters else ""
    console.print(f"{count} posts{suffix}")


@app.command("list")
def list_posts(
    root: Path = typer.Argument(Path("."), help="Directory containing posts.", resolve_path=True),
    status: Optional[str] = typer.Option(None, help="draft or published"),
    content_type: Optional[str] = typer.Option(None, "--type", help="Content type"),
    since: Optional[str] = typer.Option(None, help="Earliest date (YYYY-MM-DD)"),
    until: Optional[str] = typer.Option(None, help="Latest date (YYYY-MM-DD)"),
    grouped: bool = typer.Option(False, "--grouped", help="Group drafts and published"),
    workers: int = typer.Option(AppConfig().max_workers, help="Parser threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List posts, drafts first then most recently modified."""
    _setup_logging(verbose)
    store = _load_store(root, workers)
    query = _build_query(None, status, content_type, since, until)
    _print_documents(store.apply_query(query), query, grouped)


@app.command()
def search(
    text: str = typer.Argument(..., help="Text to look for in titles, types, descriptions and tags"),
    root: Path = typer.Argument(Path("."), help="Directory containing posts.", resolve_path=True),
    status: Optional[str] = typer.Option(None, help="draft or published"),
    content_type: Optional[str] = typer.Option(None, "--type", help="Content type"),
    since: Optional[str] = typer.Option(None, help="Earliest date (YYYY-MM-DD)"),
    until: Optional[str] = typer.Option(None, help="Latest date (YYYY-MM-DD)"),
    workers: int = typer.Option(AppConfig().max_workers, help="Parser threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search posts by text, optionally narrowed by filters."""
    _setup_logging(verbose)
    store = _load_store(root, workers)
    query = _build_query(text, status, content_type, since, until)
    _print_documents(store.apply_query(query), query, grouped=False)


@app.command()
def drafts(
    root: Path = typer.Argument(Path("."), help="Directory containing posts.", resolve_path=True),
    workers: int = typer.Option(AppConfig().max_workers, help="Parser threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show drafts with their freshness."""
    _setup_logging(verbose)
    store = _load_store(root, workers)
    entries = draft_entries(store.current_collection())
    rows: List[Row] = [DocumentRow(document, freshness) for document, freshness in entries]
    _print_rows(rows, len(rows), Query(status="draft"))


@app.command()
def stats(
    root: Path = typer.Argument(Path("."), help="Directory containing posts.", resolve_path=True),
    workers: int = typer.Option(AppConfig().max_workers, help="Parser threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Summarise the collection."""
    _setup_logging(verbose)
    store = _load_store(root, workers)
    summary = store.statistics()
    distribution = summary.word_count_distribution

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Detail")

    table.add_row(
        "Total Posts",
        str(summary.total_posts),
        f"{summary.draft_count} drafts, {summary.published_count} published",
    )
    table.add_row(
        "Total Words", format_count(summary.total_words), f"Across all {summary.total_posts} posts"
    )
    table.add_row("This Month", str(summary.posts_this_month), "Posts created or modified this month")
    table.add_row("This Year", str(summary.posts_this_year), "Posts created or modified this year")
    table.add_row("Average/Month", str(summary.average_posts_per_month), "Average posts per month this year")
    table.add_row("Short Posts", str(distribution.short), "Under 300 words")
    table.add_row("Medium Posts", str(distribution.medium), "300-1000 words")
    table.add_row("Long Posts", str(distribution.long), "Over 1000 words")

    by_count = sorted(summary.type_breakdown.items(), key=lambda item: item[1], reverse=True)
    for name, count in by_count:
        if count > 0:
            table.add_row(f"{name.capitalize()}s", str(count), f"{name} posts")

    console.print(table)


@app.command()
def promote(
    path: Path = typer.Argument(..., help="Draft to publish", resolve_path=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Remove the draft flag and stamp a publication date."""
    _setup_logging(verbose)
    result = promote_post(path)
    if not result.ok:
        console.print(f"[red]Failed to promote draft: {escape(result.error or '')}[/red]")
        raise typer.Exit(code=1)
    console.print(f"Promoted draft: [bold]{path.name}[/bold]")


@app.command()
def demote(
    path: Path = typer.Argument(..., help="Post to turn back into a draft", resolve_path=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Mark a published post as a draft again."""
    _setup_logging(verbose)
    result = demote_post(path)
    if not result.ok:
        console.print(f"[red]Failed to convert to draft: {escape(result.error or '')}[/red]")
        raise typer.Exit(code=1)
    console.print(f"Converted to draft: [bold]{path.name}[/bold]")


@app.command()
def types(
    root: Path = typer.Argument(Path("."), help="Directory containing posts.", resolve_path=True),
    workers: int = typer.Option(AppConfig().max_workers, help="Parser threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the content types present, usable with --type."""
    _setup_logging(verbose)
    store = _load_store(root, workers)
    present = available_types(store.current_collection())
    if not present:
        console.print("[yellow]No posts found.[/yellow]")
        return
    for name in present:
        console.print(name)
