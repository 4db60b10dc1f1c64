"""Command-line interface for the lawtree converter."""

import json
import logging
from enum import Enum
from pathlib import Path

import jsonschema
import typer
from rich.console import Console

from lawtree.config import GII_BASE_URL
from lawtree.logging_config import setup_logging
from lawtree.models import Document
from lawtree.parsers.converter import convert, convert_file
from lawtree.parsers.download import download_law, download_url
from lawtree.storage.writer import (
    dump_json,
    generate_document_dict,
    save_json,
    save_yaml,
    validate_document_dict,
)

__version__ = "0.1.0"

app = typer.Typer(
    name="lawtree",
    help="Convert German federal statutes (gesetze-im-internet.de XML) to a JSON tree.",
)
console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    YAML = "yaml"


def _count_nodes(document: Document) -> int:
    """Count the nodes below the document root."""
    return sum(1 for _ in document.iter_nodes()) - 1


def _write(document: Document, output: Path, output_format: OutputFormat, source: str) -> Path:
    if output_format is OutputFormat.YAML:
        return save_yaml(document, output, source=source)
    return save_json(document, output, source=source)


def _emit(
    document: Document,
    output: Path | None,
    output_format: OutputFormat,
    source: str,
) -> None:
    """Write a document to a file, or print its JSON to stdout."""
    if _count_nodes(document) == 0:
        err_console.print("[yellow]Warning:[/yellow] no nodes were parsed")

    if output is None:
        typer.echo(dump_json(generate_document_dict(document, source)), nl=False)
        return

    output_path = _write(document, output, output_format, source)
    err_console.print(f"[bold green]Saved to:[/bold green] {output_path}")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log record dispatch at DEBUG level",
    ),
) -> None:
    """Configure logging for all commands."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command("convert")
def convert_command(
    input_file: Path = typer.Argument(
        ...,
        help="GII XML file (e.g., BJNR254210009.xml)",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: print JSON to stdout)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--format",
        "-f",
        help="Output format when writing to a file",
    ),
) -> None:
    """Convert a GII XML file to a document tree."""
    try:
        document = convert_file(input_file)
        _emit(document, output, output_format, source=input_file.name)
    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command("convert-all")
def convert_all(
    data_dir: Path = typer.Argument(
        ...,
        help="Directory containing one folder per statute",
    ),
    output_dir: Path = typer.Argument(
        ...,
        help="Directory for the JSON output",
    ),
) -> None:
    """Convert every BJNR*.xml below DATA_DIR to <folder>.json."""
    if not data_dir.is_dir():
        err_console.print(f"[bold red]Error:[/bold red] {data_dir} is not a directory")
        raise typer.Exit(1)

    sources = sorted(data_dir.rglob("BJNR*.xml"))
    failed: list[Path] = []

    for source in sources:
        target = output_dir / f"{source.parent.name}.json"
        try:
            document = convert_file(source)
            save_json(document, target, source=source.name)
            console.print(f"  {source.parent.name}: {_count_nodes(document)} nodes")
        except Exception as e:
            err_console.print(f"[bold red]Error:[/bold red] {source}: {e}")
            failed.append(source)

    console.print()
    console.print(
        f"[bold]Converted {len(sources) - len(failed)} of {len(sources)} files[/bold]"
    )
    if failed:
        raise typer.Exit(1)


@app.command()
def download(
    slug: str = typer.Argument(
        ...,
        help="Statute slug as used on gesetze-im-internet.de (e.g., bnatschg_2009)",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: print JSON to stdout)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--format",
        "-f",
        help="Output format when writing to a file",
    ),
) -> None:
    """Download a statute by slug and convert it."""
    try:
        err_console.print(f"[dim]Downloading {slug} from {GII_BASE_URL}...[/dim]")
        xml = download_law(slug)
        document = convert(xml)
        _emit(document, output, output_format, source=download_url(slug))
    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command()
def validate(
    file: Path = typer.Argument(
        ...,
        help="JSON file produced by 'lawtree convert'",
    ),
) -> None:
    """Validate a converted JSON file against the output schema."""
    try:
        with open(file, encoding="utf-8") as f:
            data = json.load(f)
        validate_document_dict(data)
    except jsonschema.ValidationError as e:
        err_console.print(f"[bold red]Invalid:[/bold red] {e.message}")
        raise typer.Exit(1) from e
    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    console.print(f"[bold green]Valid:[/bold green] {file}")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"lawtree {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
