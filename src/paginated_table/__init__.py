"""Paginated table view state engine.

Derives the visible page of a record set from search, quick filters, column
filters, sort and pagination state, and persists named filter presets.
"""

from .models import (  # noqa: F401
    DictRecord,
    FilterOperator,
    FilterPreset,
    LinkRef,
    PaginationState,
    QuickFilter,
    SortDirection,
    SortState,
)

__all__ = [
    "DictRecord",
    "FilterOperator",
    "FilterPreset",
    "LinkRef",
    "PaginationState",
    "QuickFilter",
    "SortDirection",
    "SortState",
]

__version__ = "0.1.0"
