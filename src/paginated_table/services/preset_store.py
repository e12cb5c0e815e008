"""Filter preset store.

A preset is a named snapshot of the live filter criteria (search query, quick
filters, non-empty column filters) plus the pagination the user was looking
at when it was saved. The store reads and restores the criteria through the
view's :class:`FilterService`; pagination is handed back to the caller on
activation because the store does not own the pagination state.

Persisted format: a JSON array of preset objects::

    [
        {"id": "...", "name": "Open bugs",
         "filters": [{"propertyId": "status", "value": "open", "operator": "equals"}],
         "searchQuery": "crash",
         "columnFilters": {"owner": ["alice"]},
         "pageSize": 50, "currentPage": 3}
    ]

Loading is fail-soft: malformed JSON or a non-list payload yields an empty
store, and individual malformed entries are skipped.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import List, Optional

from paginated_table.models import FilterPreset, PresetPagination

from .filter_service import FilterService

_logger = logging.getLogger(__name__)

__all__ = ["PresetStore", "parse_presets", "serialize_presets"]


def serialize_presets(presets: List[FilterPreset]) -> str:
    return json.dumps([p.to_json_obj() for p in presets], ensure_ascii=False)


def parse_presets(text: Optional[str]) -> List[FilterPreset]:
    if not text:
        return []
    try:
        raw = json.loads(text)
    except (TypeError, ValueError):
        _logger.warning("Discarding malformed filter presets payload")
        return []
    if not isinstance(raw, list):
        _logger.warning("Filter presets payload is not a list; ignoring")
        return []
    presets: List[FilterPreset] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            presets.append(FilterPreset.from_json_obj(item))
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            _logger.warning("Skipping malformed filter preset %r: %s", item.get("id"), exc)
    return presets


def _new_id() -> str:
    return uuid.uuid4().hex[:16]


class PresetStore:
    def __init__(self, filters: FilterService):
        self._filters = filters
        self._presets: List[FilterPreset] = []

    # Persistence -----------------------------------------------------
    def load(self, text: Optional[str]) -> None:
        self._presets = parse_presets(text)
        active = self._filters.active_preset_id
        if active is not None and self.get(active) is None:
            self._filters.set_active_preset_id(None)

    def serialize(self) -> str:
        return serialize_presets(self._presets)

    # Queries ---------------------------------------------------------
    def presets(self) -> List[FilterPreset]:
        return list(self._presets)

    def get(self, preset_id: str) -> Optional[FilterPreset]:
        for p in self._presets:
            if p.id == preset_id:
                return p
        return None

    @property
    def active_preset_id(self) -> Optional[str]:
        return self._filters.active_preset_id

    # CRUD ------------------------------------------------------------
    def save(self, name: str, pagination: PresetPagination) -> FilterPreset:
        preset = FilterPreset(id=_new_id(), name=name)
        self._capture(preset, pagination)
        self._presets.append(preset)
        self._filters.set_active_preset_id(preset.id)
        _logger.info("Saved filter preset %s (%s)", preset.id, name)
        return preset

    def update(self, preset_id: str, pagination: PresetPagination) -> bool:
        preset = self.get(preset_id)
        if preset is None:
            _logger.debug("Update of unknown preset %s ignored", preset_id)
            return False
        self._capture(preset, pagination)
        return True

    def rename(self, preset_id: str, name: str) -> bool:
        preset = self.get(preset_id)
        if preset is None or not name.strip():
            return False
        preset.name = name.strip()
        return True

    def delete(self, preset_id: str) -> bool:
        before = len(self._presets)
        self._presets = [p for p in self._presets if p.id != preset_id]
        if self._filters.active_preset_id == preset_id:
            self._filters.set_active_preset_id(None)
        return len(self._presets) != before

    def activate(self, preset_id: Optional[str]) -> Optional[PresetPagination]:
        """Restore a preset into the live filter state.

        ``None`` clears every filter and deactivates. Returns the preset's
        saved pagination (if it has one) for the caller to apply; unknown ids
        leave the state untouched and return ``None``.
        """
        if preset_id is None:
            self._filters.clear_all_filters()
            return None
        preset = self.get(preset_id)
        if preset is None:
            _logger.debug("Activation of unknown preset %s ignored", preset_id)
            return None
        self._filters.restore(
            preset.id,
            search_query=preset.search_query or "",
            quick_filters=preset.filters,
            column_filters=preset.column_filters,
        )
        return preset.pagination()

    def _capture(self, preset: FilterPreset, pagination: PresetPagination) -> None:
        column_filters = self._filters.column_filters()
        preset.filters = self._filters.quick_filters()
        preset.search_query = self._filters.search_query or None
        preset.column_filters = column_filters or None
        preset.page_size = pagination.page_size
        preset.current_page = pagination.current_page
