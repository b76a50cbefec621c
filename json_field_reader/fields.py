from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from .accessors import Document, apply
from .errors import DocumentError, ExtractError, RegistrationError
from .sanitize import ERR_QUERY, Reading, sanitize

logger = logging.getLogger(__name__)

EXTRACT_ERROR_POLICIES = ('empty', 'tag')

Extractor = Callable[[str, Union[str, bytes, Document]], str]


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    expression: str
    raw_value: str = ''
    value: float = 0.0
    error: str = ''


FieldCollection = Dict[str, FieldDescriptor]


def register(collection: FieldCollection, name: str, expression: str) -> FieldDescriptor:
    """Add (or replace) a field; populate() fills in the reading later."""
    if collection is None:
        raise ValueError("collection is None")
    if not name:
        raise RegistrationError("field name must not be empty")
    if not expression:
        raise RegistrationError(f"field {name!r} has an empty query expression")
    descriptor = FieldDescriptor(name=name, expression=expression)
    collection[name] = descriptor
    return descriptor


def new_collection(registrations: Union[Dict[str, str], Iterable[Tuple[str, str]], None] = None) -> FieldCollection:
    collection: FieldCollection = {}
    if registrations is None:
        return collection
    items = registrations.items() if isinstance(registrations, dict) else registrations
    for name, expression in items:
        register(collection, name, expression)
    return collection


def parse_registration(text: str) -> Tuple[str, str]:
    """Split 'NAME=EXPR' on the first '='."""
    name, sep, expression = (text or '').partition('=')
    name = name.strip()
    expression = expression.strip()
    if not sep or not name or not expression:
        raise RegistrationError(f"expected NAME=EXPRESSION, got {text!r}")
    return name, expression


def _extract_reading(
    descriptor: FieldDescriptor,
    document: Union[str, bytes, Document],
    extractor: Extractor,
    on_extract_error: str,
) -> Tuple[str, Reading]:
    try:
        raw = extractor(descriptor.expression, document)
    except ExtractError as e:
        logger.warning("field %r: extraction failed (%s): %s", descriptor.name, type(e).__name__, e)
        if on_extract_error == 'tag':
            return '', Reading(0.0, ERR_QUERY)
        raw = ''
    return raw, sanitize(raw)


def populate(
    collection: FieldCollection,
    document: Union[str, bytes, Document],
    on_extract_error: str = 'empty',
    extractor: Optional[Extractor] = None,
) -> FieldCollection:
    """Extract and sanitize every field of `collection` in place.

    Each entry is replaced by a new FieldDescriptor; a failing field never
    stops the others. `on_extract_error` is 'empty' (treat as an empty raw
    value) or 'tag' (report '<query error>').
    """
    if collection is None:
        raise ValueError("collection is None")
    if on_extract_error not in EXTRACT_ERROR_POLICIES:
        raise ValueError(
            f"on_extract_error must be one of {EXTRACT_ERROR_POLICIES}, got {on_extract_error!r}"
        )
    if extractor is None:
        extractor = apply
        # parse once for all fields; a broken document fails each field instead
        try:
            document = Document.parse(document)
        except DocumentError as e:
            logger.warning("document is not valid JSON: %s", e)

    for name in list(collection):
        descriptor = collection[name]
        raw, reading = _extract_reading(descriptor, document, extractor, on_extract_error)
        collection[name] = replace(descriptor, raw_value=raw, value=reading.value, error=reading.error)
        logger.debug("field %r raw=%s value=%.2f error=%r", name, raw, reading.value, reading.error)

    return collection
