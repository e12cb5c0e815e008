"""Service layer exports.

Responsibilities:
 - Value normalization, sorting, filtering and pagination of record sets
 - Filter preset CRUD and serialization
 - Per-view configuration, plugin settings, notifications and log capture
"""

from .event_bus import EventBus, TableEvent  # noqa: F401
from .filter_service import FilterService  # noqa: F401
from .pagination_service import PaginationService, parse_page_size  # noqa: F401
from .preset_store import PresetStore  # noqa: F401

__all__ = [
    "EventBus",
    "TableEvent",
    "FilterService",
    "PaginationService",
    "parse_page_size",
    "PresetStore",
]
