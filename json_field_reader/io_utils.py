from __future__ import annotations

import json
from typing import Dict

from .errors import RegistrationError


def read_document(file_obj) -> bytes:
    """Read raw JSON bytes from an uploaded file, file object or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek') and file_obj.seekable():
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, str):
            content = content.encode('utf-8')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'rb') as f:
        return f.read()


def read_registrations(file_obj) -> Dict[str, str]:
    """Read a {"field name": "query expression"} JSON object."""
    try:
        data = json.loads(read_document(file_obj))
    except ValueError as e:
        raise RegistrationError(f"Error parsing field registrations: {e}") from e

    if not isinstance(data, dict):
        raise RegistrationError("Field registrations must be a JSON object of name -> expression.")
    out: Dict[str, str] = {}
    for name, expression in data.items():
        if not isinstance(expression, str):
            raise RegistrationError(f"Expression for {name!r} must be a string.")
        out[name] = expression
    return out
