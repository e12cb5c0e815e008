"""In-process log capture for the table view.

Keeps the most recent records emitted under the ``paginated_table`` logger
namespace (rejected page sizes, skipped presets, column moves...) so a
diagnostics panel can list them per component. Each record is reduced to a
:class:`CapturedLog` whose ``component`` is the logger name relative to the
package, e.g. ``services.preset_store``. With an :class:`EventBus`, every
capture is also published as ``TableEvent.LOG_RECORD_ADDED``.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Deque, Iterator, List, Optional, Union

from .event_bus import EventBus, TableEvent

__all__ = ["CapturedLog", "LoggingService", "PACKAGE_LOGGER"]

PACKAGE_LOGGER = "paginated_table"

Level = Union[int, str]


@dataclass(frozen=True)
class CapturedLog:
    level: str
    levelno: int
    component: str
    message: str
    created: float


def _component(logger_name: str) -> str:
    prefix = PACKAGE_LOGGER + "."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix):]
    return logger_name


def _levelno(level: Level) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.NOTSET


class _CaptureHandler(logging.Handler):
    def __init__(self, sink: Callable[[logging.LogRecord], None]) -> None:
        super().__init__(logging.DEBUG)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        self._sink(record)


class LoggingService:
    def __init__(self, capacity: int = 500, bus: EventBus | None = None) -> None:
        self._buffer: Deque[CapturedLog] = deque(maxlen=capacity)
        self._bus = bus
        self._handler = _CaptureHandler(self._capture)
        self._logger: Optional[logging.Logger] = None
        self._saved_level: Optional[int] = None
        self._publishing = False

    def attach(self, logger_name: str | None = PACKAGE_LOGGER) -> None:
        """Start capturing ``logger_name`` (``None`` means the root logger)."""
        if self._logger is not None:
            return
        logger = logging.getLogger(logger_name)
        self._saved_level = logger.level
        if logger.getEffectiveLevel() > logging.DEBUG:
            logger.setLevel(logging.DEBUG)
        logger.addHandler(self._handler)
        self._logger = logger

    def detach(self) -> None:
        if self._logger is None:
            return
        self._logger.removeHandler(self._handler)
        if self._saved_level is not None:
            self._logger.setLevel(self._saved_level)
        self._logger = None
        self._saved_level = None

    def _capture(self, record: logging.LogRecord) -> None:
        captured = CapturedLog(
            level=record.levelname,
            levelno=record.levelno,
            component=_component(record.name),
            message=record.getMessage(),
            created=record.created,
        )
        self._buffer.append(captured)
        if self._bus is None or self._publishing:
            return
        # A failing subscriber logs through this handler again; publish once
        self._publishing = True
        try:
            self._bus.publish(TableEvent.LOG_RECORD_ADDED, asdict(captured))
        finally:
            self._publishing = False

    def recent(self, limit: Optional[int] = None) -> List[CapturedLog]:
        entries = list(self._buffer)
        return entries[-limit:] if limit is not None else entries

    def _select(
        self, min_level: Level | None, component: str | None
    ) -> Iterator[CapturedLog]:
        threshold = _levelno(min_level) if min_level is not None else logging.NOTSET
        for entry in self._buffer:
            if entry.levelno < threshold:
                continue
            if component and not entry.component.startswith(component):
                continue
            yield entry

    def filter(
        self, *, min_level: Level | None = None, component: str | None = None
    ) -> List[CapturedLog]:
        """Entries at or above ``min_level`` whose component starts with ``component``."""
        return list(self._select(min_level, component))

    def clear(self) -> None:
        self._buffer.clear()

    def export_jsonl(
        self,
        path: str | Path,
        *,
        min_level: Level | None = None,
        component: str | None = None,
        append: bool = False,
    ) -> int:
        """Write the selected entries to ``path`` as JSON Lines; returns the count."""
        entries = self.filter(min_level=min_level, component=component)
        with Path(path).open("a" if append else "w", encoding="utf-8") as fh:
            for entry in entries:
                fh.write(json.dumps(asdict(entry), sort_keys=True) + "\n")
        return len(entries)
