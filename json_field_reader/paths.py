from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple, Union

from .errors import QuerySyntaxError


class Key(NamedTuple):
    name: str


class Index(NamedTuple):
    position: int


class Slice(NamedTuple):
    start: Optional[int]
    end: Optional[int]


Step = Union[Key, Index, Slice]


class Query(NamedTuple):
    expression: str
    steps: Tuple[Step, ...]


def escape_path_segment(segment: str) -> str:
    """Escape a single key segment for query-expression representation.

    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    - A leading '[' is escaped so the key is not read as an array index.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    escaped = segment.replace('\\', '\\\\').replace('.', '\\.')
    if escaped.startswith('['):
        escaped = '\\' + escaped
    return escaped


def unescape_path_segment(segment: str) -> str:
    if segment is None:
        return ''
    out: List[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == '\\' and i + 1 < len(segment):
            out.append(segment[i + 1])
            i += 2
        else:
            out.append(ch)
            i += 1
    return ''.join(out)


def split_raw_segments(path: str) -> List[str]:
    """Split on unescaped '.', keeping escape pairs inside each segment."""
    parts: List[str] = []
    buf: List[str] = []
    escaping = False

    for ch in path:
        if escaping:
            # Keep the escape pair so unescape_path_segment can process it.
            buf.append('\\')
            buf.append(ch)
            escaping = False
            continue

        if ch == '\\':
            escaping = True
            continue
        if ch == '.':
            parts.append(''.join(buf))
            buf = []
            continue
        buf.append(ch)

    if escaping:
        # Trailing backslash; treat as literal.
        buf.append('\\')

    parts.append(''.join(buf))
    return [p for p in parts if p != '']


def _parse_int(text: str, expression: str) -> int:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        raise QuerySyntaxError(
            f"invalid array index {text!r} in {expression!r}", expression
        ) from None


def _parse_bracket(segment: str, expression: str) -> Step:
    if not segment.endswith(']') or len(segment) < 2:
        raise QuerySyntaxError(f"unbalanced '[' in {expression!r}", expression)

    inner = segment[1:-1]
    if '[' in inner or ']' in inner:
        raise QuerySyntaxError(f"nested brackets in {expression!r}", expression)
    if ':' in inner:
        start_text, _, end_text = inner.partition(':')
        if ':' in end_text:
            raise QuerySyntaxError(f"slice step is not supported in {expression!r}", expression)
        start = _parse_int(start_text, expression) if start_text.strip() else None
        end = _parse_int(end_text, expression) if end_text.strip() else None
        return Slice(start, end)
    if not inner.strip():
        raise QuerySyntaxError(f"empty array index in {expression!r}", expression)
    return Index(_parse_int(inner, expression))


def parse_query(expression: str) -> Query:
    """Compile a jq-like expression such as '.STATS.[1].GHS 5s'.

    '.' (or '') selects the whole document, '[N]' an array element,
    '[A:B]' an array slice; any other segment is an object key.
    """
    if expression is None:
        raise QuerySyntaxError("expression is None")
    if not isinstance(expression, str):
        expression = str(expression)

    steps: List[Step] = []
    for raw in split_raw_segments(expression):
        if raw.startswith('['):
            steps.append(_parse_bracket(raw, expression))
        else:
            steps.append(Key(unescape_path_segment(raw)))
    return Query(expression, tuple(steps))
