"""Command-line interface for Type Harvest."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from type_harvest import __version__
from type_harvest.config import get_settings
from type_harvest.core.extractor import ExtractionError, TextExtractor
from type_harvest.formatting.ir import ExtractionResult, FontGroup
from type_harvest.formatting.options import BoldMode, LinkTarget, ListSource

app = typer.Typer(
    name="type-harvest",
    help="Extract styled text as semantic HTML, grouped by font family.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Type Harvest v{__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def build_options(**overrides) -> dict:
    """Settings defaults overridden by any option given on the command line."""
    options = get_settings().render_defaults()
    for name, value in overrides.items():
        if value is None:
            continue
        options[name] = value
    return options


def group_title(group: FontGroup) -> str:
    suffix = " (variable)" if group.is_variable else ""
    count = len(group.items)
    return f"{group.font_family}{suffix} - {count} block{'s' if count != 1 else ''}"


def print_groups(result: ExtractionResult) -> None:
    """Print each font group as a panel of rendered cards."""
    for group in result.groups:
        body = Text()
        for index, card in enumerate(group.items):
            if index:
                body.append("\n\n")
            body.append(f"{card.node_id}", style="bold cyan")
            if card.font_style:
                body.append(f"  {card.font_style}", style="dim")
            body.append("\n")
            body.append(card.html)
        console.print(Panel(body, title=group_title(group), title_align="left"))


def print_items(result: ExtractionResult) -> None:
    """Print one HTML fragment per line, in reading order."""
    for item in result.items:
        console.print(item, markup=False, highlight=False, soft_wrap=True)


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Design export (.json), Word document (.docx) or text file (.txt)",
        exists=True,
        dir_okay=False,
    ),
    bold: Optional[BoldMode] = typer.Option(
        None,
        "--bold",
        "-b",
        help="How bold runs are rendered: strong, span or none",
    ),
    italic: Optional[bool] = typer.Option(
        None,
        "--italic/--no-italic",
        help="Wrap italic runs in <em>",
    ),
    paragraphs: Optional[bool] = typer.Option(
        None,
        "--paragraphs/--no-paragraphs",
        help="Group consecutive plain lines into <p> elements",
    ),
    join_lines: Optional[bool] = typer.Option(
        None,
        "--join-lines/--no-join-lines",
        help="Separate plain lines with <br> (when not grouping into <p>)",
    ),
    links: Optional[LinkTarget] = typer.Option(
        None,
        "--links",
        help="Open links in the same tab or a new tab",
    ),
    lists: Optional[ListSource] = typer.Option(
        None,
        "--lists",
        help="Detect lists from text markers only (pattern) or from "
        "document list attributes with a marker fallback (native)",
    ),
    select: Optional[list[str]] = typer.Option(
        None,
        "--select",
        "-s",
        help="Node id to extract (repeatable, JSON exports only)",
    ),
    flat: bool = typer.Option(
        False,
        "--flat",
        "-f",
        help="Print the HTML fragments only, one per line",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write items and groups as JSON to this file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Render the text of a design export or document as HTML.

    Examples:

        python harvest.py export.json

        python harvest.py export.json --select 12:7 --bold strong

        python harvest.py notes.docx --paragraphs --links same-tab

        python harvest.py notes.txt --flat --lists pattern

        python harvest.py export.json -o result.json
    """
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    options = build_options(
        bold=bold,
        italic=italic,
        wrap_paragraphs=paragraphs,
        join_lines=join_lines,
        links=links,
        lists=lists,
    )
    extractor = TextExtractor(options)

    if verbose:
        console.print(f"[blue]Processing:[/blue] {path}")
        for name, value in extractor.options.model_dump(mode="json").items():
            console.print(f"[blue]{name}:[/blue] {value}")

    try:
        result = extractor.extract_file(path, select=select or None)
    except ExtractionError as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    if output is not None:
        output.write_text(
            json.dumps(result.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        console.print(f"[green]Saved:[/green] {output}")

    if result.message:
        console.print(f"[yellow]{result.message}[/yellow]")
        raise typer.Exit(0)

    if flat:
        print_items(result)
    elif output is None:
        print_groups(result)

    console.print(
        f"\n[bold]Complete:[/bold] {len(result.items)} block(s), "
        f"{len(result.groups)} font group(s)"
    )


if __name__ == "__main__":
    app()
