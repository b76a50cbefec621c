from __future__ import annotations

import json
import logging
from typing import Any, Union

from .errors import DocumentError, NoMatchError
from .paths import Index, Key, Query, Slice, parse_query

logger = logging.getLogger(__name__)


class RawNumber(str):
    """A JSON number kept as the exact text it had in the document."""


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


class Document:
    """A parsed JSON document whose numbers keep their source text."""

    def __init__(self, data: Any):
        self.data = data

    @classmethod
    def parse(cls, raw: Union[str, bytes, bytearray]) -> 'Document':
        if isinstance(raw, Document):
            return raw
        try:
            data = json.loads(
                raw,
                parse_float=RawNumber,
                parse_int=RawNumber,
                parse_constant=_reject_constant,
            )
        except (TypeError, ValueError) as e:
            raise DocumentError(f"cannot parse JSON document: {e}") from e
        except RecursionError as e:
            raise DocumentError("cannot parse JSON document: nested too deeply") from e
        return cls(data)


def resolve(data: Any, query: Query) -> Any:
    """Walk `data` along the compiled query and return the matched value."""
    val = data
    for step in query.steps:
        if isinstance(step, Key):
            if not isinstance(val, dict) or step.name not in val:
                raise NoMatchError(f"key {step.name!r} not found", query.expression)
            val = val[step.name]
        elif isinstance(step, Index):
            if not isinstance(val, list):
                raise NoMatchError(f"[{step.position}] applied to a non-array", query.expression)
            try:
                val = val[step.position]
            except IndexError:
                raise NoMatchError(
                    f"index {step.position} out of range ({len(val)} items)", query.expression
                ) from None
        elif isinstance(step, Slice):
            if not isinstance(val, list):
                raise NoMatchError("slice applied to a non-array", query.expression)
            val = val[step.start:step.end]
    return val


def _encode_string(value: str) -> str:
    text = json.dumps(value, ensure_ascii=False)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates stay as \u escapes
        return json.dumps(value)
    return text


def encode_fragment(value: Any) -> str:
    """Render a matched value back to compact JSON text."""
    if isinstance(value, RawNumber):
        return str.__str__(value)
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return _encode_string(value)
    if isinstance(value, list):
        return '[' + ','.join(encode_fragment(v) for v in value) + ']'
    if isinstance(value, dict):
        items = (_encode_string(str(k)) + ':' + encode_fragment(v) for k, v in value.items())
        return '{' + ','.join(items) + '}'
    return json.dumps(value)


def apply(expression: str, document: Union[str, bytes, bytearray, Document]) -> str:
    """Evaluate `expression` against `document` and return the raw JSON fragment.

    Raises QuerySyntaxError, DocumentError or NoMatchError (all ExtractError).
    """
    query = parse_query(expression)
    doc = Document.parse(document)
    try:
        fragment = encode_fragment(resolve(doc.data, query))
    except RecursionError as e:
        raise DocumentError(f"value matched by {expression!r} is nested too deeply", expression) from e
    logger.debug("apply %r -> %s", expression, fragment)
    return fragment
