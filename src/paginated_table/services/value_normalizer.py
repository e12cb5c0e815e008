"""Value normalization for heterogeneous record properties.

Record values arrive as whatever the host stores: ``None``, strings, numbers,
booleans, dates, link references, lists, or single strings that encode several
bracketed links (``"[[a]], [[b]]"``). This module is the one place that turns
those shapes into strings:

 - ``to_display_string``: one canonical string per value
 - ``to_search_atoms``: the atomic strings used for membership and search tests
 - ``is_empty``: the uniform "blank cell" predicate used by rendering and sorting

Dates render as ISO ``YYYY-MM-DD`` so filter values stay stable across locales.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Iterable, List

__all__ = [
    "to_display_string",
    "to_search_atoms",
    "is_empty",
    "split_multi_values",
    "is_multi_value",
]

_OPEN = "["
_CLOSE = "]"
_SEPARATOR = ","


def is_multi_value(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def _iter_items(value: Any) -> Iterable[Any]:
    if isinstance(value, (set, frozenset)):
        # Unordered containers get a deterministic order
        return sorted(value, key=to_display_string)
    return value


def to_display_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_multi_value(value):
        return ", ".join(to_display_string(item) for item in _iter_items(value))
    path = getattr(value, "path", None)
    if isinstance(path, str):
        display = getattr(value, "display", None)
        return display if isinstance(display, str) and display else path
    if isinstance(value, dict):
        try:
            return json.dumps(value, sort_keys=True, default=str)
        except (TypeError, ValueError):
            return ""
    return str(value)


def split_multi_values(text: str) -> List[str]:
    """Split an encoded multi-value string at top-level commas.

    Only strings whose every top-level part is bracketed are split, so
    ``"[[a, b]], [[c]]"`` yields ``["[[a, b]]", "[[c]]"]`` while ``"Smith, John"``
    stays a single atom. Unbalanced brackets leave the text untouched.
    """
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in text:
        if ch == _OPEN:
            depth += 1
        elif ch == _CLOSE:
            depth -= 1
            if depth < 0:
                return [text]
        if ch == _SEPARATOR and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    if depth != 0:
        return [text]
    parts.append("".join(current).strip())
    if len(parts) < 2:
        return [text]
    if all(p.startswith(_OPEN) and p.endswith(_CLOSE) for p in parts):
        return parts
    return [text]


def to_search_atoms(value: Any) -> List[str]:
    """Decompose a value into atoms; empty values become ``[""]``.

    List elements are decomposed recursively and a blank element contributes
    its own ``""`` atom, so an "(empty)" column filter also matches lists with
    blank entries.
    """
    if is_multi_value(value):
        atoms: List[str] = []
        for item in _iter_items(value):
            atoms.extend(to_search_atoms(item))
        return atoms or [""]
    if is_empty(value):
        return [""]
    if isinstance(value, str):
        return split_multi_values(value)
    return [to_display_string(value)]


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == "" or value == "null"
    if is_multi_value(value):
        return len(value) == 0 or to_display_string(value) == ""
    return to_display_string(value) == ""
