"""ViewModel coordinating one paginated table view.

Owns the filter, sort and pagination state of a single view together with
its preset store, and turns the host's record set into a
:class:`RenderSnapshot` for rendering collaborators. Every mutating action
recomputes synchronously over the whole record set:

    filter -> sort -> pagination.set_total_items -> page slice

Filter and sort changes reset to the first page before recomputing. Preset
activation restores the preset's saved page size and page after the filter
recompute. Configuration writes (``pageSize``, ``filterPresets``,
``columnOrder``, ``filterableColumns``) go through :class:`ViewConfig`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from paginated_table.config.settings import (
    EMPTY_VALUE_LABEL,
    PAGE_SIZE_OPTIONS,
    SEARCH_DEBOUNCE_MS,
)
from paginated_table.models import (
    FilterOperator,
    FilterPreset,
    PaginationState,
    PresetPagination,
    QuickFilter,
    Record,
    SortDirection,
    SortState,
)
from paginated_table.services.column_order import (
    apply_column_order,
    move_column,
    toggle_filterable,
)
from paginated_table.services.event_bus import EventBus, Subscription, TableEvent
from paginated_table.services.filter_service import FilterService
from paginated_table.services.pagination_service import (
    PageNavigation,
    PaginationService,
    parse_page_size,
)
from paginated_table.services.preset_store import PresetStore
from paginated_table.services.settings_service import PaginatorSettings
from paginated_table.services.sort_comparator import sort_records
from paginated_table.services.view_config import ViewConfig

_logger = logging.getLogger(__name__)

__all__ = ["PaginatedTableViewModel", "RenderSnapshot", "DisplayOptions"]


@dataclass(frozen=True)
class DisplayOptions:
    show_search_box: bool = True
    show_filter_bar: bool = True
    sticky_header: bool = True
    enable_quick_filters: bool = True
    pagination_position: str = "top"
    page_size_options: Tuple[int, ...] = PAGE_SIZE_OPTIONS
    search_debounce_ms: int = SEARCH_DEBOUNCE_MS


@dataclass(frozen=True)
class RenderSnapshot:
    page_records: List[Record]
    properties: List[str]
    pagination: PaginationState
    navigation: PageNavigation
    search_query: str
    quick_filters: List[QuickFilter]
    column_filters: Dict[str, List[str]]
    presets: List[FilterPreset]
    active_preset_id: Optional[str]
    sort: SortState
    filterable_columns: List[str]
    display: DisplayOptions


class PaginatedTableViewModel:
    def __init__(
        self,
        config: ViewConfig | None = None,
        settings: PaginatorSettings | None = None,
        bus: EventBus | None = None,
    ):
        self.config = config or ViewConfig()
        self.settings = settings or PaginatorSettings()
        self.bus = bus or EventBus()

        self.filter_service = FilterService(on_change=self._on_filter_change)
        self.pagination_service = PaginationService(
            on_change=self._on_pagination_change, page_size=self._initial_page_size()
        )
        self.preset_store = PresetStore(self.filter_service)
        self.preset_store.load(self.config.get_str("filterPresets", "[]"))

        self._column_order: List[str] = self.config.get_list("columnOrder")
        self._filterable: List[str] = self.config.get_list("filterableColumns")
        self._records: List[Record] = []
        self._source_properties: List[str] = []
        self._properties: List[str] = []
        self._sort = SortState()
        self._snapshot: Optional[RenderSnapshot] = None

    def _initial_page_size(self) -> int:
        fallback = self.settings.default_page_size
        if not self.config.has("pageSize"):
            return fallback
        size = parse_page_size(self.config.get("pageSize"))
        if size is None:
            _logger.warning("Invalid configured page size %r", self.config.get("pageSize"))
            return fallback
        return size

    def _flag(self, key: str, fallback: bool) -> bool:
        return self.config.get_bool(key, fallback) if self.config.has(key) else fallback

    # Observers -------------------------------------------------------
    def subscribe(self, callback: Callable[[RenderSnapshot], None]) -> Subscription:
        return self.bus.subscribe(TableEvent.VIEW_RENDERED, lambda evt: callback(evt.payload))

    @property
    def snapshot(self) -> Optional[RenderSnapshot]:
        return self._snapshot

    # Data source -----------------------------------------------------
    def set_data(self, records: Sequence[Record], properties: Sequence[str]) -> RenderSnapshot:
        self._records = list(records)
        self._source_properties = list(properties)
        self._refresh_properties()
        return self.render()

    def _refresh_properties(self) -> None:
        self._properties = apply_column_order(self._source_properties, self._column_order)
        self.filter_service.set_visible_properties(self._properties)

    @property
    def properties(self) -> List[str]:
        return list(self._properties)

    # Recompute -------------------------------------------------------
    def render(self) -> RenderSnapshot:
        filtered = self.filter_service.apply(self._records)
        ordered = sort_records(filtered, self._sort)
        self.pagination_service.set_total_items(len(ordered))
        snapshot = RenderSnapshot(
            page_records=self.pagination_service.get_page(ordered),
            properties=list(self._properties),
            pagination=self.pagination_service.state(),
            navigation=self.pagination_service.navigation(),
            search_query=self.filter_service.search_query,
            quick_filters=self.filter_service.quick_filters(),
            column_filters=self.filter_service.column_filters(),
            presets=self.preset_store.presets(),
            active_preset_id=self.preset_store.active_preset_id,
            sort=self._sort,
            filterable_columns=list(self._filterable),
            display=self.display_options(),
        )
        self._snapshot = snapshot
        self.bus.publish(TableEvent.VIEW_RENDERED, snapshot)
        return snapshot

    def display_options(self) -> DisplayOptions:
        s = self.settings
        position = self.config.get_str("paginationPosition", "top")
        return DisplayOptions(
            show_search_box=self._flag("showSearchBox", s.show_search_box),
            show_filter_bar=self._flag("showFilterBar", s.show_filter_bar),
            sticky_header=self._flag("stickyHeader", s.sticky_header),
            enable_quick_filters=self._flag("enableQuickFilters", s.enable_quick_filters),
            pagination_position=position if position in ("top", "bottom") else "top",
            page_size_options=self.page_size_options(),
        )

    def _on_filter_change(self) -> None:
        self.pagination_service.reset_to_first()
        self.render()
        self.bus.publish(TableEvent.FILTERS_CHANGED, self.filter_service.active_preset_id)

    def _on_pagination_change(self) -> None:
        self.render()
        self.bus.publish(TableEvent.PAGE_CHANGED, self.pagination_service.state())

    def _write_config(self, key: str, value: object) -> None:
        self.config.set(key, value)
        self.bus.publish(TableEvent.CONFIG_WRITTEN, {"key": key, "value": value})

    # Filters ---------------------------------------------------------
    def set_search_query(self, query: str) -> None:
        self.filter_service.set_search_query(query)

    def add_quick_filter(
        self, property_id: str, value: str, operator: FilterOperator = FilterOperator.EQUALS
    ) -> None:
        self.filter_service.add_quick_filter(QuickFilter(property_id, value, operator))

    def remove_quick_filter(self, property_id: str, value: str) -> None:
        self.filter_service.remove_quick_filter(property_id, value)

    def clear_filters(self) -> None:
        self.filter_service.clear_all_filters()

    def set_column_filter(self, property_id: str, values: Sequence[str]) -> None:
        self.filter_service.set_column_filter(property_id, values)

    def toggle_column_filter_value(self, property_id: str, value: str) -> None:
        self.filter_service.toggle_column_filter_value(property_id, value)

    def column_filter_options(self, property_id: str) -> List[str]:
        """Values offered by a column filter menu (over the unfiltered set)."""
        return FilterService.unique_column_values(self._records, property_id)

    @staticmethod
    def column_filter_label(value: str) -> str:
        return EMPTY_VALUE_LABEL if value == "" else value

    # Sorting ---------------------------------------------------------
    def sort_by(self, property_id: str, direction: SortDirection = SortDirection.ASC) -> None:
        self._sort = SortState(property_id, direction)
        self.pagination_service.reset_to_first()
        self.render()
        self.bus.publish(TableEvent.SORT_CHANGED, self._sort)

    def toggle_sort(self, property_id: str) -> None:
        """Header click: ascending first, then flip direction on the same column."""
        if self._sort.property_id == property_id and self._sort.direction is SortDirection.ASC:
            self.sort_by(property_id, SortDirection.DESC)
        else:
            self.sort_by(property_id, SortDirection.ASC)

    def clear_sort(self) -> None:
        self._sort = SortState()
        self.pagination_service.reset_to_first()
        self.render()
        self.bus.publish(TableEvent.SORT_CHANGED, self._sort)

    @property
    def sort(self) -> SortState:
        return self._sort

    # Pagination ------------------------------------------------------
    def go_to_page(self, page: int) -> None:
        self.pagination_service.go_to_page(page)

    def next_page(self) -> None:
        self.pagination_service.next_page()

    def previous_page(self) -> None:
        self.pagination_service.previous_page()

    def jump_pages(self, delta: int) -> None:
        self.pagination_service.jump(delta)

    def go_to_last_page(self) -> None:
        self.pagination_service.go_to_last()

    def set_page_size(self, size: int) -> bool:
        if size <= 0:
            _logger.debug("Rejected page size %s", size)
            return False
        self.pagination_service.set_page_size(size)
        self._write_config("pageSize", str(size))
        return True

    def set_custom_page_size(self, raw: str) -> bool:
        size = parse_page_size(raw)
        if size is None:
            _logger.debug("Rejected custom page size %r", raw)
            return False
        return self.set_page_size(size)

    def page_size_options(self) -> Tuple[int, ...]:
        """Preset sizes for the size selector, plus a custom current size."""
        return tuple(sorted({*PAGE_SIZE_OPTIONS, self.pagination_service.page_size}))

    def _current_pagination(self) -> PresetPagination:
        state = self.pagination_service.state()
        return PresetPagination(page_size=state.page_size, current_page=state.current_page)

    # Presets ---------------------------------------------------------
    def save_preset(self, name: str) -> Optional[FilterPreset]:
        name = name.strip()
        if not name:
            return None
        preset = self.preset_store.save(name, self._current_pagination())
        self._persist_presets()
        return preset

    def update_preset(self, preset_id: str) -> bool:
        if not self.preset_store.update(preset_id, self._current_pagination()):
            return False
        self._persist_presets()
        return True

    def rename_preset(self, preset_id: str, name: str) -> bool:
        if not self.preset_store.rename(preset_id, name):
            return False
        self._persist_presets()
        return True

    def delete_preset(self, preset_id: str) -> bool:
        if not self.preset_store.delete(preset_id):
            return False
        self._persist_presets()
        return True

    def activate_preset(self, preset_id: Optional[str]) -> None:
        if preset_id is not None and self.preset_store.get(preset_id) is None:
            _logger.debug("Ignoring activation of unknown preset %s", preset_id)
            return
        restored = self.preset_store.activate(preset_id)
        if restored is None:
            return
        # Page size first so the target page is clamped against the new page count
        if restored.page_size != self.pagination_service.page_size:
            self.pagination_service.set_page_size(restored.page_size)
        self.pagination_service.go_to_page(restored.current_page)

    def _persist_presets(self) -> None:
        self._write_config("filterPresets", self.preset_store.serialize())
        self.render()
        self.bus.publish(TableEvent.PRESETS_CHANGED, self.preset_store.presets())

    # Columns ---------------------------------------------------------
    def move_column(self, from_index: int, to_index: int) -> bool:
        reordered = move_column(self._properties, from_index, to_index)
        if reordered is None:
            return False
        self._column_order = reordered
        self._write_config("columnOrder", list(reordered))
        self._refresh_properties()
        self.render()
        return True

    def set_filterable(self, property_id: str, enable: bool) -> None:
        self._filterable = toggle_filterable(self._filterable, property_id, enable)
        self._write_config("filterableColumns", list(self._filterable))
        self.render()

    @property
    def filterable_columns(self) -> List[str]:
        return list(self._filterable)
