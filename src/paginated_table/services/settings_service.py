"""Plugin-wide paginator settings.

Defaults that apply to every table view unless a view's own configuration
overrides them (e.g. a view's ``pageSize`` wins over ``default_page_size``).

Persistence follows the user preference files: versioned JSON, atomic write,
defaults on missing / corrupt / incompatible data.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
import logging
from pathlib import Path
from typing import Any, Dict

from paginated_table.config.settings import DEFAULT_PAGE_SIZE

from .json_store import read_document, store_path, write_document

_logger = logging.getLogger(__name__)

__all__ = [
    "PaginatorSettings",
    "load_settings",
    "save_settings",
    "SETTINGS_VERSION",
]

SETTINGS_VERSION = 1
SETTINGS_FILENAME = "paginator_settings.json"


@dataclass
class PaginatorSettings:
    """Serializable paginator settings.

    Attributes
    ----------
    version: Schema version for future migrations.
    default_page_size: Rows per page for views without their own page size.
    show_search_box: Whether the search box is shown by default.
    show_filter_bar: Whether the filter bar (search, chips, presets) is shown.
    sticky_header: Whether the table header stays visible while scrolling.
    enable_quick_filters: Whether clicking a cell value adds a quick filter.
    """

    version: int = SETTINGS_VERSION
    default_page_size: int = DEFAULT_PAGE_SIZE
    show_search_box: bool = True
    show_filter_bar: bool = True
    sticky_header: bool = True
    enable_quick_filters: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginatorSettings":
        try:
            page_size = int(data.get("default_page_size", DEFAULT_PAGE_SIZE))
        except (TypeError, ValueError):
            page_size = DEFAULT_PAGE_SIZE
        return cls(
            version=int(data.get("version", SETTINGS_VERSION)),
            default_page_size=page_size if page_size > 0 else DEFAULT_PAGE_SIZE,
            show_search_box=bool(data.get("show_search_box", True)),
            show_filter_bar=bool(data.get("show_filter_bar", True)),
            sticky_header=bool(data.get("sticky_header", True)),
            enable_quick_filters=bool(data.get("enable_quick_filters", True)),
        )


def load_settings(base_dir: str | Path | None = None) -> PaginatorSettings:
    data = read_document(store_path(SETTINGS_FILENAME, base_dir))
    if data is None:
        return PaginatorSettings()
    try:
        settings = PaginatorSettings.from_dict(data)
    except (TypeError, ValueError) as exc:
        _logger.warning("Invalid paginator settings (%s); using defaults", exc)
        return PaginatorSettings()
    if settings.version != SETTINGS_VERSION:
        # Keep the page size, reset the rest
        return PaginatorSettings(default_page_size=settings.default_page_size)
    return settings


def save_settings(settings: PaginatorSettings, base_dir: str | Path | None = None) -> Path:
    return write_document(store_path(SETTINGS_FILENAME, base_dir), settings.to_dict())
