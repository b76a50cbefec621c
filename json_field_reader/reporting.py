from __future__ import annotations

import csv
import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from .fields import FieldCollection, FieldDescriptor

DEFAULT_NAME_WIDTH = 15
REPORT_COLUMNS = ['name', 'value', 'raw_value', 'error', 'expression']


def sorted_fields(collection: FieldCollection) -> List[FieldDescriptor]:
    if collection is None:
        raise ValueError("collection is None")
    # code point order of str equals byte-wise order of UTF-8
    return [collection[name] for name in sorted(collection)]


def report_rows(collection: FieldCollection) -> List[Dict[str, Any]]:
    """Structured equivalent of format_report(), one dict per field."""
    return [
        {
            'name': f.name,
            'value': f.value,
            'raw_value': f.raw_value,
            'error': f.error,
            'expression': f.expression,
        }
        for f in sorted_fields(collection)
    ]


def format_line(descriptor: FieldDescriptor, name_width: int = DEFAULT_NAME_WIDTH) -> str:
    line = f"{descriptor.name:<{name_width}} = {descriptor.value:7.2f}, raw value {descriptor.raw_value}"
    if descriptor.error:
        line += f", parsing error {descriptor.error}"
    return line


def format_report(collection: FieldCollection, name_width: int = DEFAULT_NAME_WIDTH) -> List[str]:
    return [format_line(f, name_width) for f in sorted_fields(collection)]


def print_report(
    collection: FieldCollection,
    stream: Optional[TextIO] = None,
    name_width: int = DEFAULT_NAME_WIDTH,
) -> None:
    out = stream if stream is not None else sys.stdout
    for line in format_report(collection, name_width):
        out.write(line + '\n')


def export_report(collection: FieldCollection, path: str, output_format: str = 'CSV') -> str:
    """Write report_rows() to `path` as CSV or JSON and return the path."""
    rows = report_rows(collection)
    if output_format.upper() == 'CSV':
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=REPORT_COLUMNS)
            writer.writeheader()
            if rows:
                writer.writerows(rows)
    elif output_format.upper() == 'JSON':
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(rows, f, indent=2, ensure_ascii=False)
    else:
        raise ValueError(f"unsupported output format {output_format!r}")
    return path
