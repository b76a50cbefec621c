from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Tuple

import gradio as gr

from .accessors import Document
from .errors import DocumentError, RegistrationError
from .example import EXAMPLE_DOCUMENT, EXAMPLE_FIELDS
from .fields import FieldCollection, new_collection, populate
from .io_utils import read_document
from .reporting import export_report, format_report, report_rows
from .schema_utils import default_field_name, suggest_expressions

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["Field Name", "Query Expression"]


def load_document_handler(file_obj):
    """Read an uploaded JSON file into the document box and offer its expressions."""
    if file_obj is None:
        return "", gr.update(choices=[], value=[]), "No file uploaded."

    try:
        raw = read_document(file_obj)
        doc = Document.parse(raw)
    except (OSError, ValueError, DocumentError) as e:
        return "", gr.update(choices=[], value=[]), f"Error parsing JSON: {str(e)}"

    expressions = suggest_expressions(doc.data)
    text = raw.decode('utf-8', errors='replace')
    return text, gr.update(choices=expressions, value=[]), f"Successfully loaded. Found {len(expressions)} scalar values."


def suggest_handler(document_text: str):
    if not document_text or not document_text.strip():
        return gr.update(choices=[], value=[]), "No document."
    try:
        doc = Document.parse(document_text)
    except DocumentError as e:
        return gr.update(choices=[], value=[]), str(e)
    expressions = suggest_expressions(doc.data)
    return gr.update(choices=expressions, value=[]), f"Found {len(expressions)} scalar values."


def update_field_table(selected_expressions) -> List[List[str]]:
    if not selected_expressions:
        return []
    return [[default_field_name(e), e] for e in selected_expressions]


def table_to_registrations(field_table) -> List[Tuple[str, str]]:
    if field_table is None:
        return []
    try:
        names = field_table[TABLE_HEADERS[0]].tolist()
        expressions = field_table[TABLE_HEADERS[1]].tolist()
        rows = list(zip(names, expressions))
    except (TypeError, KeyError, AttributeError):
        rows = [(row[0], row[1]) for row in field_table if len(row) >= 2]

    out: List[Tuple[str, str]] = []
    for name, expression in rows:
        name = '' if name is None else str(name).strip()
        expression = '' if expression is None else str(expression).strip()
        if not name and not expression:
            continue
        out.append((name, expression))
    return out


def _populate_from_inputs(document_text: str, field_table, policy: str) -> FieldCollection:
    registrations = table_to_registrations(field_table)
    if not registrations:
        raise RegistrationError("No fields registered.")
    collection = new_collection(registrations)
    populate(collection, document_text or '', on_extract_error=policy or 'empty')
    return collection


def populate_handler(document_text: str, field_table, policy: str = 'empty'):
    """Run the fields over the document; returns (report text, preview rows, status)."""
    try:
        collection = _populate_from_inputs(document_text, field_table, policy)
    except (RegistrationError, ValueError) as e:
        return "", None, str(e)

    failed = sum(1 for f in collection.values() if f.error)
    status = f"Read {len(collection)} fields ({failed} with errors)."
    return "\n".join(format_report(collection)), report_rows(collection), status


def export_report_handler(document_text: str, field_table, policy: str, output_format: str, file_name: str):
    try:
        collection = _populate_from_inputs(document_text, field_table, policy)
    except (RegistrationError, ValueError) as e:
        return None, str(e)

    if not file_name or not file_name.strip():
        file_name = "readings"

    ext = f".{output_format.lower()}"
    if not file_name.lower().endswith(ext):
        file_name += ext

    path = os.path.join(tempfile.gettempdir(), file_name)
    try:
        export_report(collection, path, output_format)
    except (OSError, ValueError) as e:
        logger.warning("export to %s failed: %s", path, e)
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def example_inputs() -> Tuple[str, List[List[str]]]:
    return EXAMPLE_DOCUMENT.decode('utf-8'), [[name, expr] for name, expr in EXAMPLE_FIELDS.items()]
