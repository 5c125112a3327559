"""Search, similarity, classification and insights commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import msgspec
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mailsearch.history import QueryHistory
from mailsearch.models import (
    Document,
    Insights,
    QueryCategory,
    QueryLogEntry,
    SearchResult,
)

documents_option = click.option(
    "--documents",
    "-d",
    "documents_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="JSON file with the messages to search",
)
json_option = click.option("--json", "output_json", is_flag=True, help="Output as JSON")


def load_json_list(path: Path, item_type: type) -> list[Any]:
    """Load a JSON array of structs from a file."""
    try:
        with open(path) as f:
            data = json.load(f)
        return msgspec.convert(data, list[item_type])
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}")
    except msgspec.ValidationError as e:
        raise click.ClickException(f"{path} has an unexpected layout: {e}")


def echo_json(value: Any) -> None:
    click.echo(json.dumps(msgspec.to_builtins(value), indent=2))


def render_highlight(snippet: str, tag: str) -> str:
    """Turn highlight tags into rich markup."""
    return (
        escape(snippet)
        .replace(f"<{tag}>", "[reverse]")
        .replace(f"</{tag}>", "[/reverse]")
    )


@click.command()
@click.argument("query", nargs=-1, required=True)
@documents_option
@click.option("--limit", "-n", type=int, default=None, help="Maximum results to show")
@click.option("--record", is_flag=True, help="Record the query in the search history")
@json_option
@click.pass_context
def search(
    ctx: click.Context,
    query: tuple[str, ...],
    documents_path: Path,
    limit: int | None,
    record: bool,
    output_json: bool,
) -> None:
    """Search messages with a free-text query."""
    engine = ctx.obj.engine
    query_text = " ".join(query)
    documents = load_json_list(documents_path, Document)

    if record:
        engine.history = QueryHistory(ctx.obj.config.history_dir)

    results = engine.search(query_text, documents)
    if limit is not None:
        results = results[:limit]

    if output_json:
        echo_json(results)
        return

    _display_results(ctx.obj.console, results, query_text, ctx.obj.config.highlight_tag)


def _display_results(
    console: Console, results: list[SearchResult], query: str, tag: str
) -> None:
    if not results:
        console.print(f"[yellow]No messages match '{escape(query)}'[/yellow]")
        return

    table = Table(title=f"Results for '{escape(query)}'", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Relevance", justify="right")
    table.add_column("Subject", style="bold")
    table.add_column("From")
    table.add_column("Matched")
    table.add_column("Highlights")

    for rank, result in enumerate(results, 1):
        highlights = "\n".join(
            f"[dim]{h.field.value}:[/dim] {render_highlight(h.snippet, tag)}"
            for h in result.highlights
        )
        table.add_row(
            str(rank),
            f"{result.relevance:.2f}",
            escape(result.document.subject),
            escape(result.document.sender),
            ", ".join(f.value for f in result.matched_fields),
            highlights or escape(result.summary),
        )

    console.print(table)


@click.command()
@click.argument("document_id")
@documents_option
@json_option
@click.pass_context
def similar(
    ctx: click.Context, document_id: str, documents_path: Path, output_json: bool
) -> None:
    """Find messages similar to the message with DOCUMENT_ID."""
    console = ctx.obj.console
    documents = load_json_list(documents_path, Document)

    source = next((d for d in documents if d.id == document_id), None)
    if source is None:
        console.print(f"[red]Message not found:[/red] {escape(document_id)}")
        ctx.exit(1)

    matches = ctx.obj.engine.find_similar(source, documents)

    if output_json:
        echo_json(matches)
        return

    if not matches:
        console.print("[yellow]No similar messages found[/yellow]")
        return

    similarity = ctx.obj.engine.similarity
    table = Table(title=f"Messages similar to '{escape(source.subject)}'")
    table.add_column("ID", style="dim")
    table.add_column("Similarity", justify="right")
    table.add_column("Subject", style="bold")
    table.add_column("From")
    for document in matches:
        table.add_row(
            escape(document.id),
            f"{similarity.similarity(source, document):.2f}",
            escape(document.subject),
            escape(document.sender),
        )
    console.print(table)


@click.command()
@click.argument("query", nargs=-1, required=True)
@json_option
@click.pass_context
def classify(ctx: click.Context, query: tuple[str, ...], output_json: bool) -> None:
    """Classify a query and show the terms extracted from it."""
    result = ctx.obj.engine.classify(" ".join(query))

    if output_json:
        echo_json(result)
        return

    _display_category(ctx.obj.console, result)


def _display_category(console: Console, result: QueryCategory) -> None:
    console.print(
        f"Category: [bold cyan]{result.category.value}[/bold cyan] "
        f"(confidence {result.confidence:.2f})"
    )
    if not result.extracted_terms:
        return

    table = Table()
    table.add_column("Type")
    table.add_column("Value", style="bold")
    table.add_column("Confidence", justify="right")
    for term in result.extracted_terms:
        table.add_row(term.type.value, escape(term.value), f"{term.confidence:.2f}")
    console.print(table)


@click.command()
@click.option(
    "--log",
    "log_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON query log to analyze (default: recorded search history)",
)
@json_option
@click.pass_context
def insights(ctx: click.Context, log_path: Path | None, output_json: bool) -> None:
    """Summarize past queries into usage insights."""
    if log_path:
        query_log = load_json_list(log_path, QueryLogEntry)
    else:
        query_log = QueryHistory(ctx.obj.config.history_dir).entries

    result = ctx.obj.engine.summarize(query_log)

    if output_json:
        echo_json(result)
        return

    _display_insights(ctx.obj.console, result)


def _display_insights(console: Console, result: Insights) -> None:
    if result.top_search_terms:
        terms = Table(title="Top search terms")
        terms.add_column("Term", style="bold")
        terms.add_column("Frequency", justify="right")
        for item in result.top_search_terms:
            terms.add_row(escape(item.term), str(item.frequency))
        console.print(terms)
    else:
        console.print("[yellow]No queries recorded yet[/yellow]")

    if result.search_patterns.common_categories:
        categories = Table(title="Query categories")
        categories.add_column("Category")
        categories.add_column("Share", justify="right")
        for share in result.search_patterns.common_categories:
            categories.add_row(share.category, f"{share.percentage}%")
        console.print(categories)

    busiest = max(range(24), key=lambda h: result.search_patterns.time_of_day[h])
    if result.search_patterns.time_of_day[busiest]:
        console.print(f"Busiest hour: [bold]{busiest:02d}:00[/bold]")

    lines = [f"• {escape(s)}" for s in result.suggestions.saved_searches]
    console.print(Panel("\n".join(lines), title="Suggested saved searches"))
    lines = [f"• {escape(s)}" for s in result.suggestions.improvements]
    console.print(Panel("\n".join(lines), title="Search tips"))


@click.command()
@click.argument("text", nargs=-1)
@click.pass_context
def suggest(ctx: click.Context, text: tuple[str, ...]) -> None:
    """Suggest complete queries for partial input."""
    for suggestion in ctx.obj.engine.suggest(" ".join(text)):
        click.echo(suggestion)
