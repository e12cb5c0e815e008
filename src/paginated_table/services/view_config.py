"""Per-view configuration store.

String-keyed values read when a table view initializes and written back when
the user changes page size, presets, column order or filterable columns.
Values are stored the way the host persists them (``pageSize`` is a string,
``filterPresets`` is the preset store's JSON text), so the typed getters parse
defensively and fall back to :data:`VIEW_OPTION_DEFAULTS`.

Persistence mirrors the app config files: versioned JSON, atomic tmp-file
replace on save, defaults on a missing, corrupt or incompatible file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from paginated_table.config.settings import DEFAULT_PAGE_SIZE

from .json_store import read_document, store_path, write_document

_logger = logging.getLogger(__name__)

__all__ = [
    "ViewConfig",
    "VIEW_OPTION_DEFAULTS",
    "VIEW_CONFIG_VERSION",
    "load_view_config",
    "save_view_config",
]

VIEW_CONFIG_VERSION = 1
DEFAULT_FILENAME = "table_view.json"

VIEW_OPTION_DEFAULTS: Dict[str, Any] = {
    "pageSize": str(DEFAULT_PAGE_SIZE),
    "showSearchBox": True,
    "filterableColumns": [],
    "showFilterBar": True,
    "stickyHeader": True,
    "enableQuickFilters": True,
    "filterPresets": "[]",
    "columnOrder": [],
    "paginationPosition": "top",
}

_MISSING = object()


class ViewConfig:
    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        on_write: Callable[[str, Any], None] | None = None,
    ):
        self._values: Dict[str, Any] = dict(values or {})
        self.on_write = on_write

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, default: Any = None) -> Any:
        value = self._values.get(key, _MISSING)
        if value is _MISSING:
            return VIEW_OPTION_DEFAULTS.get(key, default)
        return value

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        if self.on_write is not None:
            self.on_write(key, value)

    # Typed getters ---------------------------------------------------
    def get_str(self, key: str, default: str = "") -> str:
        value = self.get(key, default)
        return default if value is None else str(value)

    def get_int(self, key: str, default: int) -> int:
        value = self.get(key, default)
        if isinstance(value, bool):
            return default
        try:
            return int(str(value).strip(), 10)
        except ValueError:
            _logger.debug("Config %s=%r is not an integer; using %s", key, value, default)
            return default

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.get(key, default)
        if value is None:
            return default
        return value is True or value == "true"

    def get_list(self, key: str) -> List[str]:
        value = self.get(key, [])
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        if isinstance(value, str) and value.strip():
            try:
                parsed = json.loads(value)
            except ValueError:
                return [part.strip() for part in value.split(",") if part.strip()]
            if isinstance(parsed, list):
                return [str(v) for v in parsed]
        return []

    # Serialization ---------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"version": VIEW_CONFIG_VERSION, "values": dict(self._values)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ViewConfig":
        values = data.get("values")
        return cls(values if isinstance(values, dict) else {})


def load_view_config(base_dir: str | Path | None = None) -> ViewConfig:
    data = read_document(store_path(DEFAULT_FILENAME, base_dir), version=VIEW_CONFIG_VERSION)
    return ViewConfig() if data is None else ViewConfig.from_dict(data)


def save_view_config(cfg: ViewConfig, base_dir: str | Path | None = None) -> Path:
    return write_document(store_path(DEFAULT_FILENAME, base_dir), cfg.to_dict())
