"""Filter state and the three-stage filter pipeline.

The service owns the live filter criteria of one table view:

 - free-text search over the visible properties
 - quick filters (``property operator value`` pins, AND-combined)
 - column filters (per-property accepted-value sets, OR within a property,
   AND across properties)

``apply`` runs search -> quick filters -> column filters, each stage narrowing
the previous stage's output. Every manual mutation clears the active preset id
and invokes the ``on_change`` callback synchronously.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, TypeVar

from paginated_table.models import FilterOperator, FilterState, QuickFilter, Record

from .sort_comparator import natural_sorted
from .value_normalizer import to_display_string, to_search_atoms

_logger = logging.getLogger(__name__)

__all__ = ["FilterService"]

R = TypeVar("R", bound=Record)


def _noop() -> None:
    pass


class FilterService:
    def __init__(self, on_change: Callable[[], None] | None = None):
        self._on_change = on_change or _noop
        self._state = FilterState()
        self._column_filters: Dict[str, List[str]] = {}
        self._visible_properties: List[str] = []

    # Visible properties ----------------------------------------------
    def set_visible_properties(self, properties: Sequence[str]) -> None:
        self._visible_properties = list(properties)

    @property
    def visible_properties(self) -> List[str]:
        return list(self._visible_properties)

    # Search ----------------------------------------------------------
    @property
    def search_query(self) -> str:
        return self._state.search_query

    def set_search_query(self, query: str) -> None:
        self._state.search_query = query
        self._mark_manual_change()

    # Quick filters ---------------------------------------------------
    def quick_filters(self) -> List[QuickFilter]:
        return list(self._state.quick_filters)

    def add_quick_filter(self, quick_filter: QuickFilter) -> bool:
        """Append a quick filter; duplicates by (property, value) are ignored."""
        if any(
            f.same_target(quick_filter.property_id, quick_filter.value)
            for f in self._state.quick_filters
        ):
            _logger.debug("Quick filter %r already active", quick_filter)
            return False
        self._state.quick_filters.append(quick_filter)
        self._mark_manual_change()
        return True

    def remove_quick_filter(self, property_id: str, value: str) -> None:
        self._state.quick_filters = [
            f for f in self._state.quick_filters if not f.same_target(property_id, value)
        ]
        self._mark_manual_change()

    # Column filters --------------------------------------------------
    def set_column_filter(self, property_id: str, values: Iterable[str]) -> None:
        accepted = list(dict.fromkeys(values))  # ordered, de-duplicated
        if accepted:
            self._column_filters[property_id] = accepted
        else:
            self._column_filters.pop(property_id, None)
        self._mark_manual_change()

    def toggle_column_filter_value(self, property_id: str, value: str) -> None:
        current = self.column_filter_values(property_id)
        if value in current:
            current.remove(value)
        else:
            current.append(value)
        self.set_column_filter(property_id, current)

    def column_filter_values(self, property_id: str) -> List[str]:
        return list(self._column_filters.get(property_id, []))

    def column_filters(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._column_filters.items()}

    def clear_column_filters(self) -> None:
        self._column_filters.clear()
        self._mark_manual_change()

    def clear_all_filters(self) -> None:
        self._reset()
        self._on_change()

    def has_active_filters(self) -> bool:
        return bool(self._state.search_query or self._state.quick_filters or self._column_filters)

    # Preset hooks ----------------------------------------------------
    # Used by PresetStore; these do not count as manual mutations.
    @property
    def active_preset_id(self) -> Optional[str]:
        return self._state.active_preset_id

    def set_active_preset_id(self, preset_id: Optional[str]) -> None:
        self._state.active_preset_id = preset_id

    def restore(
        self,
        preset_id: str,
        *,
        search_query: str,
        quick_filters: Sequence[QuickFilter],
        column_filters: Mapping[str, Sequence[str]] | None,
    ) -> None:
        self._state.active_preset_id = preset_id
        self._state.search_query = search_query
        self._state.quick_filters = list(quick_filters)
        self._column_filters = {
            k: list(v) for k, v in (column_filters or {}).items() if v
        }
        self._on_change()

    def _reset(self) -> None:
        self._state = FilterState()
        self._column_filters = {}

    def _mark_manual_change(self) -> None:
        self._state.active_preset_id = None
        self._on_change()

    # Filtering -------------------------------------------------------
    def apply(self, records: Sequence[R]) -> List[R]:
        result: List[R] = list(records)
        if self._state.search_query:
            result = self._apply_search(result, self._state.search_query)
        for quick_filter in self._state.quick_filters:
            result = [r for r in result if self._matches_quick_filter(r, quick_filter)]
        if self._column_filters:
            result = [r for r in result if self._matches_column_filters(r)]
        return result

    def _apply_search(self, records: List[R], query: str) -> List[R]:
        needle = query.lower()
        props = self._visible_properties

        def matches(record: R) -> bool:
            for prop in props:
                for atom in to_search_atoms(record.get_value(prop)):
                    if needle in atom.lower():
                        return True
            return False

        return [r for r in records if matches(r)]

    @staticmethod
    def _matches_quick_filter(record: Record, quick_filter: QuickFilter) -> bool:
        text = to_display_string(record.get_value(quick_filter.property_id))
        op = quick_filter.operator
        if op is FilterOperator.EQUALS:
            return text == quick_filter.value
        if op is FilterOperator.CONTAINS:
            return quick_filter.value.lower() in text.lower()
        if op is FilterOperator.NOT_EQUALS:
            return text != quick_filter.value
        return True

    def _matches_column_filters(self, record: Record) -> bool:
        for prop, accepted in self._column_filters.items():
            accepted_set: Set[str] = set(accepted)
            atoms = to_search_atoms(record.get_value(prop))
            if not any(atom in accepted_set for atom in atoms):
                return False
        return True

    # Column filter menu support -------------------------------------
    @staticmethod
    def unique_column_values(records: Iterable[Record], property_id: str) -> List[str]:
        """Distinct atoms of a property across records, natural order.

        Empty values contribute ``""`` (shown as the "(empty)" option).
        """
        seen: Dict[str, None] = {}
        for record in records:
            for atom in to_search_atoms(record.get_value(property_id)):
                seen.setdefault(atom, None)
        return natural_sorted(seen.keys())
