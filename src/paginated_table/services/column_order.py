"""Column order and filterable-column helpers.

A persisted custom order is reconciled against the properties the data source
currently offers: known ids keep their custom position, vanished ids are
dropped and new ids are appended in source order.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

_logger = logging.getLogger(__name__)

__all__ = ["apply_column_order", "move_column", "toggle_filterable"]


def apply_column_order(source: Sequence[str], custom: Sequence[str] | None) -> List[str]:
    if not custom:
        return list(source)
    available = set(source)
    ordered: List[str] = []
    for prop in custom:
        if prop in available and prop not in ordered:
            ordered.append(prop)
    placed = set(ordered)
    ordered.extend(p for p in source if p not in placed)
    return ordered


def move_column(order: Sequence[str], from_index: int, to_index: int) -> Optional[List[str]]:
    """Move one column; ``None`` when either index is out of range."""
    size = len(order)
    if not (0 <= from_index < size and 0 <= to_index < size):
        _logger.debug("Rejected column move %s -> %s (size %s)", from_index, to_index, size)
        return None
    result = list(order)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def toggle_filterable(columns: Sequence[str], property_id: str, enable: bool) -> List[str]:
    if enable:
        return list(columns) if property_id in columns else [*columns, property_id]
    return [c for c in columns if c != property_id]
