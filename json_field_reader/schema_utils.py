from __future__ import annotations

from typing import Any, List, Set

from .paths import Key, escape_path_segment, parse_query


def collect_leaf_expressions(data: Any, parent_key: str = '') -> Set[str]:
    """Recursively build a query expression for every scalar in a JSON structure."""
    keys: Set[str] = set()

    if isinstance(data, dict):
        for k, v in data.items():
            if k == '':
                # an empty key has no expression that addresses it
                continue
            current_key = f"{parent_key}.{escape_path_segment(k)}"
            if isinstance(v, (dict, list)):
                keys.update(collect_leaf_expressions(v, current_key))
            else:
                keys.add(current_key)
    elif isinstance(data, list):
        for i, item in enumerate(data):
            current_key = f"{parent_key}.[{i}]"
            if isinstance(item, (dict, list)):
                keys.update(collect_leaf_expressions(item, current_key))
            else:
                keys.add(current_key)
    else:
        keys.add(parent_key or '.')

    return keys


def suggest_expressions(data: Any) -> List[str]:
    return sorted(collect_leaf_expressions(data))


def default_field_name(expression: str) -> str:
    """Last key of an expression, used as the suggested field name."""
    keys = [s.name for s in parse_query(expression).steps if isinstance(s, Key)]
    return keys[-1] if keys else expression
