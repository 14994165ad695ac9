"""CLI interface for the wallabag-to-karakeep converter.

Uses Typer for argument parsing and Rich for status output.  Status
goes to stderr so the converted document can be piped from stdout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wb2kk.config import ConversionConfig, MissingUrlPolicy, OutputFormat
from wb2kk.document import convert_document
from wb2kk.errors import ConversionError
from wb2kk.io import STDIN_MARKER, read_input, write_output

__version__ = "0.1.0"

app = typer.Typer(
    name="wb2kk",
    help="Convert a Wallabag JSON export to Karakeep's import format.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console(stderr=True)

logger = logging.getLogger("wb2kk")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: int, quiet: bool = False) -> None:
    """Set up logging based on verbosity level."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wb2kk {__version__}")
        raise typer.Exit()


def _summary_table(total: int, converted: int, skipped: int) -> Table:
    table = Table(title="Conversion Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Total entries", str(total))
    table.add_row("Converted", str(converted))
    table.add_row("Skipped (no URL)", str(skipped))
    return table


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


@app.command()
def convert(
    input_source: Annotated[
        str,
        typer.Argument(
            metavar="INPUT",
            help="Wallabag export JSON file ('-' for stdin).",
        ),
    ],
    output_file: Annotated[
        Path | None,
        typer.Argument(
            metavar="[OUTPUT]",
            help="Output file path (stdout if omitted).",
        ),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option(
            "--tag",
            "-t",
            help="Extra tag to add to every bookmark (repeatable).",
        ),
    ] = None,
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = OutputFormat.bookmarks,
    on_missing_url: Annotated[
        MissingUrlPolicy,
        typer.Option(
            "--on-missing-url",
            help="Skip entries without a URL, or fail the conversion.",
        ),
    ] = MissingUrlPolicy.skip,
    require_http_url: Annotated[
        bool,
        typer.Option(
            "--require-http-url",
            help="Only accept absolute http(s) URLs.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Convert and report without writing output."),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity."),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only report errors."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Convert a wallabag JSON export to a Karakeep import document."""
    _configure_logging(verbose, quiet)

    config = ConversionConfig(
        extra_tags=tuple(tags or ()),
        output_format=fmt,
        missing_url_policy=on_missing_url,
        require_http_url=require_http_url,
    )
    logger.debug("Run configuration: %s", config)

    # --- Read ---
    source_name = "stdin" if input_source == STDIN_MARKER else input_source
    try:
        raw_input = read_input(input_source)
    except OSError as exc:
        console.print(
            f"[red]Error:[/red] Failed to read input: {escape(str(exc))}"
        )
        raise typer.Exit(code=1)  # noqa: B904

    # --- Convert ---
    try:
        result = convert_document(raw_input, config)
    except ConversionError as exc:
        console.print(
            f"[red]Error:[/red] Invalid input in {escape(source_name)}: "
            f"{escape(str(exc))}"
        )
        raise typer.Exit(code=1)  # noqa: B904

    if not quiet:
        console.print(
            f"Converted: [bold green]{result.converted}[/bold green]  "
            f"Skipped: [bold yellow]{result.skipped}[/bold yellow]  "
            f"(of {result.total} entries in {escape(source_name)})"
        )

    # --- Write ---
    if dry_run:
        if not quiet:
            console.print(
                _summary_table(result.total, result.converted, result.skipped)
            )
            console.print("[yellow]Dry-run mode:[/yellow] no output written.")
        return

    try:
        write_output(result.data, output_file)
    except OSError as exc:
        console.print(
            f"[red]Error:[/red] Failed to write output: {escape(str(exc))}"
        )
        raise typer.Exit(code=1)  # noqa: B904

    if output_file is not None and not quiet:
        console.print(f"Written to [bold]{escape(str(output_file))}[/bold]")


if __name__ == "__main__":
    app()
