"""Command line entry point: `json-field-reader run` and `json-field-reader suggest`."""

import csv
import io
import json
import logging
import sys
from typing import List, Optional

import typer

from json_field_reader.accessors import Document
from json_field_reader.config import get_settings
from json_field_reader.errors import DocumentError, RegistrationError
from json_field_reader.example import EXAMPLE_DOCUMENT, EXAMPLE_FIELDS
from json_field_reader.fields import EXTRACT_ERROR_POLICIES, new_collection, parse_registration, populate, register
from json_field_reader.io_utils import read_document, read_registrations
from json_field_reader.reporting import REPORT_COLUMNS, format_report, report_rows
from json_field_reader.schema_utils import suggest_expressions

OUTPUT_FORMATS = ("text", "json", "csv")

app = typer.Typer(
    name="json-field-reader",
    help="Read numeric fields out of a JSON document with query expressions",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Send log records to stderr so stdout only carries the report."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_document(source: Optional[str]) -> Optional[bytes]:
    if source is None:
        return None
    if source == "-":
        return read_document(sys.stdin.buffer)
    return read_document(source)


@app.command("run")
def run(
    document: Optional[str] = typer.Option(
        None, "--document", "-d", help="JSON document path, or '-' for stdin (default: built-in example)"
    ),
    field: Optional[List[str]] = typer.Option(
        None, "--field", "-f", help="Field registration NAME=EXPRESSION (repeatable)"
    ),
    fields_file: Optional[str] = typer.Option(
        None, "--fields-file", help="JSON object mapping field names to expressions"
    ),
    output_format: str = typer.Option("text", "--format", help="text, json or csv"),
    on_extract_error: Optional[str] = typer.Option(
        None, "--on-extract-error", help="empty (default) or tag"
    ),
    name_width: Optional[int] = typer.Option(None, "--name-width", help="Minimum width of the name column"),
):
    """Extract the registered fields and print one reading per field."""
    settings = get_settings()
    setup_logging(settings.log_level)

    policy = (on_extract_error or settings.on_extract_error).lower()
    if policy not in EXTRACT_ERROR_POLICIES:
        typer.echo(f"--on-extract-error must be one of: {', '.join(EXTRACT_ERROR_POLICIES)}", err=True)
        raise typer.Exit(1)
    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"--format must be one of: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(1)
    width = settings.name_width if name_width is None else name_width
    if width < 0:
        typer.echo("--name-width must not be negative", err=True)
        raise typer.Exit(1)

    try:
        raw_document = _load_document(document)
        collection = new_collection(read_registrations(fields_file) if fields_file else None)
        for text in field or []:
            register(collection, *parse_registration(text))
    except RegistrationError as e:
        typer.echo(f"Invalid field registration: {e}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Cannot read input: {e}", err=True)
        raise typer.Exit(1)

    if raw_document is None:
        raw_document = EXAMPLE_DOCUMENT
        if not collection:
            collection = new_collection(EXAMPLE_FIELDS)
    elif not collection:
        typer.echo("No fields registered; use --field NAME=EXPRESSION or --fields-file.", err=True)
        raise typer.Exit(1)

    logger.info("populating %d fields (policy=%s)", len(collection), policy)
    populate(collection, raw_document, on_extract_error=policy)

    if output_format == "json":
        typer.echo(json.dumps(report_rows(collection), indent=2, ensure_ascii=False))
    elif output_format == "csv":
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=REPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(report_rows(collection))
        typer.echo(buf.getvalue(), nl=False)
    else:
        for line in format_report(collection, width):
            typer.echo(line)


@app.command("suggest")
def suggest(
    document: Optional[str] = typer.Option(
        None, "--document", "-d", help="JSON document path, or '-' for stdin (default: built-in example)"
    ),
):
    """Print a query expression for every scalar value in the document."""
    setup_logging(get_settings().log_level)

    try:
        raw_document = _load_document(document)
    except OSError as e:
        typer.echo(f"Cannot read input: {e}", err=True)
        raise typer.Exit(1)
    try:
        doc = Document.parse(raw_document if raw_document is not None else EXAMPLE_DOCUMENT)
    except DocumentError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    for expression in suggest_expressions(doc.data):
        typer.echo(expression)


def main():
    app()


if __name__ == "__main__":
    main()
