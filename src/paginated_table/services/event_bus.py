"""Synchronous publish/subscribe for table view notifications.

The view model announces every recompute (``VIEW_RENDERED``) and the cause of
it (filter, sort, page, preset or config change). Handlers run in
subscription order on the publishing call stack; there is no queueing. A
failing handler is logged and kept in ``errors`` while the remaining handlers
still run.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, DefaultDict, List, Tuple, Union

_logger = logging.getLogger(__name__)

__all__ = ["TableEvent", "Event", "EventBus", "Subscription"]


class TableEvent(str, Enum):
    VIEW_RENDERED = "view_rendered"
    FILTERS_CHANGED = "filters_changed"
    SORT_CHANGED = "sort_changed"
    PAGE_CHANGED = "page_changed"
    PRESETS_CHANGED = "presets_changed"
    CONFIG_WRITTEN = "config_written"
    LOG_RECORD_ADDED = "log_record_added"


EventName = Union[TableEvent, str]


@dataclass(frozen=True)
class Event:
    name: str
    payload: Any = None
    emitted_at: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    event: str
    handler: Handler
    once: bool = False
    active: bool = True


def _event_key(name: EventName) -> str:
    return name.value if isinstance(name, TableEvent) else str(name)


class EventBus:
    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Subscription]] = defaultdict(list)
        self._failures: List[Tuple[Event, Exception]] = []

    def subscribe(self, name: EventName, handler: Handler, *, once: bool = False) -> Subscription:
        subscription = Subscription(_event_key(name), handler, once)
        self._handlers[subscription.event].append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.active = False
        remaining = [s for s in self._handlers.get(subscription.event, []) if s is not subscription]
        if remaining:
            self._handlers[subscription.event] = remaining
        else:
            self._handlers.pop(subscription.event, None)

    def clear(self) -> None:
        self._handlers.clear()
        self._failures.clear()

    def publish(self, name: EventName, payload: Any = None) -> Event:
        event = Event(_event_key(name), payload)
        # Copy: handlers may subscribe or unsubscribe during dispatch
        for subscription in tuple(self._handlers.get(event.name, ())):
            if not subscription.active:
                continue
            if subscription.once:
                self.unsubscribe(subscription)
            try:
                subscription.handler(event)
            except Exception as exc:  # noqa: BLE001
                _logger.exception("Subscriber to %s raised", event.name)
                self._failures.append((event, exc))
        return event

    def subscriber_count(self, name: EventName) -> int:
        return len(self._handlers.get(_event_key(name), ()))

    @property
    def errors(self) -> List[Tuple[Event, Exception]]:
        return list(self._failures)
