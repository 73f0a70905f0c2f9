"""ffmeta CLI - inspect an ffmetadata export and the tool's log output.

Built with Typer for command structure and Rich for output.

    ffmeta show book.ffmetadata --stream-info ffmpeg.log
    ffmeta show book.ffmetadata --json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from ffmeta import __version__
from ffmeta.exceptions import FfmetaError
from ffmeta.logging_setup import setup_logging
from ffmeta.parser import FfmetadataParser

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="ffmeta",
    help="Extract audiobook tags and chapters from ffmetadata exports",
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ffmeta {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """Extract audiobook tags and chapters from ffmetadata exports."""


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Cannot read {path}:[/] {e}")
        raise typer.Exit(1) from e


def build_report(parser: FfmetadataParser) -> dict[str, Any]:
    """JSON-serializable summary of a finished parse."""
    report: dict[str, Any] = {
        "tag": parser.to_tag().to_dict(),
        "chapters": [chapter.to_dict() for chapter in parser.chapters],
    }
    report.update(parser.stream_info.to_dict())
    return report


def print_report(parser: FfmetadataParser) -> None:
    """Print tags, stream info and a chapter table."""
    tag_table = Table(title="Tags", show_header=True, header_style="bold")
    tag_table.add_column("Field", style="cyan")
    tag_table.add_column("Value")
    for field, value in parser.to_tag().to_dict(skip_empty=True).items():
        tag_table.add_row(field, value)
    console.print(tag_table)

    info = parser.stream_info
    if info.duration is not None:
        console.print(f"[bold]Duration:[/] {info.duration}")
    if info.format or info.codec or info.channels:
        console.print(
            f"[bold]Audio:[/] format={parser.format or '-'} "
            f"codec={info.codec.value if info.codec else '-'} "
            f"channels={int(info.channels) if info.channels else '-'}"
        )

    chapters = parser.chapters
    if not chapters:
        console.print("[dim]No chapters found[/]")
        return

    table = Table(title="Chapters", show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=4)
    table.add_column("Start")
    table.add_column("Length")
    table.add_column("Title")
    for i, chapter in enumerate(chapters, 1):
        table.add_row(str(i), str(chapter.start), str(chapter.length), chapter.title)
    console.print(table)


@app.command()
def show(
    metadata_file: Annotated[
        Path,
        typer.Argument(help="ffmetadata export (ffmpeg -f ffmetadata)."),
    ],
    stream_info_file: Annotated[
        Path | None,
        typer.Option("--stream-info", "-s", help="Captured ffmpeg log output."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print a JSON document instead of tables."),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.",
        ),
    ] = None,
) -> None:
    """Show tags, chapters and stream info from an export."""
    try:
        # Keep stderr quiet while stdout carries JSON
        setup_logging(log_level, quiet_console=as_json)
    except FfmetaError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from e

    metadata = _read_text(metadata_file)
    stream_info = _read_text(stream_info_file) if stream_info_file else ""

    try:
        parser = FfmetadataParser()
        parser.parse(metadata, stream_info)
    except FfmetaError as e:
        logger.debug("Parse failed: %s", e.details)
        err_console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from e

    if as_json:
        typer.echo(json.dumps(build_report(parser), indent=2, ensure_ascii=False))
    else:
        print_report(parser)


def main() -> int:
    """Main entry point for the CLI."""
    try:
        app()
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
