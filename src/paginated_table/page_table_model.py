"""Qt table model presenting the current page of a paginated table view.

Rows are the records of one :class:`RenderSnapshot` page and columns are the
visible properties in display order. The model is read-only; a view wires
``PaginatedTableViewModel.subscribe(model.set_snapshot)`` and the model
resets itself on every recompute.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, Qt

from paginated_table.services.value_normalizer import is_empty, to_display_string
from paginated_table.viewmodels.paginated_table_viewmodel import RenderSnapshot

__all__ = ["PageTableModel", "EMPTY_ROLE", "BOOL_TRUE_MARK", "BOOL_FALSE_MARK"]

EMPTY_ROLE = Qt.ItemDataRole.UserRole.value + 1
BOOL_TRUE_MARK = "✓"
BOOL_FALSE_MARK = "✗"

_INVALID = object()


class PageTableModel(QAbstractTableModel):
    def __init__(
        self,
        snapshot: Optional[RenderSnapshot] = None,
        labels: Mapping[str, str] | None = None,
    ):
        super().__init__()
        self._snapshot = snapshot
        self._labels: Dict[str, str] = dict(labels or {})

    def set_snapshot(self, snapshot: RenderSnapshot) -> None:
        self.beginResetModel()
        self._snapshot = snapshot
        self.endResetModel()

    def set_labels(self, labels: Mapping[str, str]) -> None:
        self._labels = dict(labels)
        if self._snapshot is not None and self._snapshot.properties:
            self.headerDataChanged.emit(
                Qt.Orientation.Horizontal, 0, len(self._snapshot.properties) - 1
            )

    # Required overrides
    def rowCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid() or self._snapshot is None:
            return 0
        return len(self._snapshot.page_records)

    def columnCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid() or self._snapshot is None:
            return 0
        return len(self._snapshot.properties)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        value = self._value_at(index)
        if value is _INVALID:
            return None
        if role == Qt.ItemDataRole.DisplayRole:
            if isinstance(value, bool):
                return BOOL_TRUE_MARK if value else BOOL_FALSE_MARK
            return "" if is_empty(value) else to_display_string(value)
        if role == Qt.ItemDataRole.UserRole:
            return value
        if role == EMPTY_ROLE:
            return is_empty(value)
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if role != Qt.ItemDataRole.DisplayRole or self._snapshot is None:
            return None
        if orientation == Qt.Orientation.Horizontal:
            props = self._snapshot.properties
            if 0 <= section < len(props):
                return self._labels.get(props[section], props[section])
            return None
        # Vertical header numbers rows across pages
        p = self._snapshot.pagination
        return str((p.current_page - 1) * p.page_size + section + 1)

    def flags(self, index: QModelIndex):  # type: ignore[override]
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    # Helpers
    def record_at(self, row: int) -> Any:
        if self._snapshot is None or not (0 <= row < len(self._snapshot.page_records)):
            return None
        return self._snapshot.page_records[row]

    def _value_at(self, index: QModelIndex) -> Any:
        if not index.isValid() or self._snapshot is None:
            return _INVALID
        record = self.record_at(index.row())
        props = self._snapshot.properties
        if record is None or not (0 <= index.column() < len(props)):
            return _INVALID
        return record.get_value(props[index.column()])

