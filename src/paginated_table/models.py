"""Core data shapes shared by the table view services.

Records are owned by the host data source; everything else here is small,
serializable state owned by one table view instance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

__all__ = [
    "Record",
    "DictRecord",
    "LinkRef",
    "FilterOperator",
    "QuickFilter",
    "FilterState",
    "SortDirection",
    "SortState",
    "PaginationState",
    "PresetPagination",
    "FilterPreset",
]


@runtime_checkable
class Record(Protocol):
    """Opaque handle to one row of the underlying data source."""

    @property
    def path(self) -> str: ...  # pragma: no cover - structural

    def get_value(self, property_id: str) -> Any: ...  # pragma: no cover - structural


@dataclass(frozen=True)
class DictRecord:
    """Mapping-backed record, handy for tests and simple hosts."""

    path: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def get_value(self, property_id: str) -> Any:
        return self.values.get(property_id)


@dataclass(frozen=True)
class LinkRef:
    """Link-like reference to another item (file, note, URL)."""

    path: str
    display: Optional[str] = None

    def __str__(self) -> str:
        return self.display or self.path


class FilterOperator(str, Enum):  # str subclass keeps JSON output plain
    EQUALS = "equals"
    CONTAINS = "contains"
    NOT_EQUALS = "not_equals"


@dataclass(frozen=True)
class QuickFilter:
    property_id: str
    value: str
    operator: FilterOperator = FilterOperator.EQUALS

    def same_target(self, property_id: str, value: str) -> bool:
        return self.property_id == property_id and self.value == value

    def to_json_obj(self) -> Dict[str, Any]:
        return {
            "propertyId": self.property_id,
            "value": self.value,
            "operator": self.operator.value,
        }

    @classmethod
    def from_json_obj(cls, obj: Mapping[str, Any]) -> "QuickFilter":
        # Raises ValueError / KeyError on malformed input; callers decide.
        return cls(
            property_id=str(obj["propertyId"]),
            value=str(obj.get("value", "")),
            operator=FilterOperator(obj.get("operator", FilterOperator.EQUALS.value)),
        )


@dataclass
class FilterState:
    search_query: str = ""
    quick_filters: List[QuickFilter] = field(default_factory=list)
    active_preset_id: Optional[str] = None


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SortState:
    property_id: Optional[str] = None  # None keeps source order
    direction: SortDirection = SortDirection.ASC


@dataclass
class PaginationState:
    current_page: int = 1
    page_size: int = 25
    total_items: int = 0
    total_pages: int = 1


@dataclass(frozen=True)
class PresetPagination:
    page_size: int
    current_page: int


@dataclass
class FilterPreset:
    """Named snapshot of search, quick filters, column filters and pagination.

    ``to_json_obj`` emits the persisted camelCase shape and omits unset
    optional fields, so ``from_json_obj(p.to_json_obj()) == p``.
    """

    id: str
    name: str
    filters: List[QuickFilter] = field(default_factory=list)
    search_query: Optional[str] = None
    column_filters: Optional[Dict[str, List[str]]] = None
    page_size: Optional[int] = None
    current_page: Optional[int] = None

    def pagination(self) -> Optional[PresetPagination]:
        if self.page_size is None or self.current_page is None:
            return None
        return PresetPagination(page_size=self.page_size, current_page=self.current_page)

    def to_json_obj(self) -> Dict[str, Any]:
        obj: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "filters": [f.to_json_obj() for f in self.filters],
        }
        if self.search_query is not None:
            obj["searchQuery"] = self.search_query
        if self.column_filters is not None:
            obj["columnFilters"] = {k: list(v) for k, v in self.column_filters.items()}
        if self.page_size is not None:
            obj["pageSize"] = self.page_size
        if self.current_page is not None:
            obj["currentPage"] = self.current_page
        return obj

    @classmethod
    def from_json_obj(cls, obj: Mapping[str, Any]) -> "FilterPreset":
        if not isinstance(obj.get("id"), str) or not isinstance(obj.get("name"), str):
            raise ValueError("preset requires string id and name")
        filters = [QuickFilter.from_json_obj(f) for f in obj.get("filters") or []]
        search = obj.get("searchQuery")
        raw_columns = obj.get("columnFilters")
        column_filters: Optional[Dict[str, List[str]]] = None
        if isinstance(raw_columns, dict):
            column_filters = {
                str(k): [str(v) for v in values]
                for k, values in raw_columns.items()
                if isinstance(values, list)
            }
        return cls(
            id=obj["id"],
            name=obj["name"],
            filters=filters,
            search_query=search if isinstance(search, str) else None,
            column_filters=column_filters,
            page_size=_optional_int(obj.get("pageSize")),
            current_page=_optional_int(obj.get("currentPage")),
        )


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None  # json.loads accepts Infinity and NaN
    return int(value)
