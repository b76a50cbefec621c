"""Turn raw JSON fragments into numeric readings.

Every input maps to exactly one `Reading`; nothing here raises.
"""
from __future__ import annotations

import json
import math
from typing import NamedTuple

ERR_EMPTY = '<empty string>'
ERR_NULL = '<null>'
ERR_UNPARSABLE = '<cannot parse to float>'
ERR_NAN = '<NaN>'
ERR_QUERY = '<query error>'


class Reading(NamedTuple):
    value: float
    error: str = ''


def is_numeric(text: str) -> bool:
    """ASCII digits with at most one '.'; no sign, exponent or whitespace."""
    dot_found = False
    for ch in text:
        if ch == '.':
            if dot_found:
                return False
            dot_found = True
        elif ch < '0' or ch > '9':
            return False
    return True


def unquote(raw: str) -> str:
    """Decode a quoted JSON string literal; anything else comes back as is."""
    if len(raw) < 2 or raw[0] != '"' or raw[-1] != '"':
        return raw
    try:
        text = json.loads(raw)
    except ValueError:
        return raw
    return text if isinstance(text, str) else raw


def sanitize(raw: str) -> Reading:
    if raw is None:
        raw = ''
    text = unquote(raw)

    if text == '':
        return Reading(0.0, ERR_EMPTY)
    if text == 'null':
        return Reading(0.0, ERR_NULL)
    if is_numeric(text):
        try:
            value = float(text)
        except ValueError:
            return Reading(0.0, ERR_UNPARSABLE)
        # a long enough digit run overflows to inf instead of raising
        if math.isinf(value):
            return Reading(0.0, ERR_UNPARSABLE)
        return Reading(value)
    return Reading(0.0, ERR_NAN)
