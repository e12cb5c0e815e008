import json
import logging

import pytest

from paginated_table.services.event_bus import EventBus, TableEvent
from paginated_table.services.logging_service import LoggingService


@pytest.fixture()
def capture():
    bus = EventBus()
    svc = LoggingService(capacity=5, bus=bus)
    svc.attach()
    yield svc, bus
    svc.detach()


def test_captures_package_records_only(capture):
    svc, _ = capture
    logging.getLogger("paginated_table.services.preset_store").info("Saved preset")
    logging.getLogger("elsewhere").warning("not captured")
    entries = svc.recent()
    assert [e.message for e in entries] == ["Saved preset"]
    assert entries[0].component == "services.preset_store"


def test_capacity_eviction(capture):
    svc, _ = capture
    for i in range(10):
        logging.getLogger("paginated_table.cap").info("M%d", i)
    recents = svc.recent()
    assert len(recents) == 5
    assert recents[0].message == "M5"
    assert [e.message for e in svc.recent(limit=2)] == ["M8", "M9"]


def test_filter_by_threshold_and_component(capture):
    svc, _ = capture
    logging.getLogger("paginated_table.services.sort_comparator").debug("sorting")
    logging.getLogger("paginated_table.services.preset_store").info("saved")
    logging.getLogger("paginated_table.services.preset_store").warning("skipped")
    assert [e.message for e in svc.filter(min_level="INFO")] == ["saved", "skipped"]
    assert [e.message for e in svc.filter(min_level=logging.WARNING)] == ["skipped"]
    assert [e.message for e in svc.filter(component="services.sort")] == ["sorting"]


def test_publishes_captured_records(capture):
    svc, bus = capture
    payloads = []
    bus.subscribe(TableEvent.LOG_RECORD_ADDED, lambda evt: payloads.append(evt.payload))
    logging.getLogger("paginated_table.viewmodels").warning("Rejected page size")
    assert payloads[-1]["level"] == "WARNING"
    assert payloads[-1]["component"] == "viewmodels"


def test_failing_log_subscriber_does_not_recurse(capture):
    svc, bus = capture

    def bad(_):
        raise RuntimeError("boom")

    bus.subscribe(TableEvent.LOG_RECORD_ADDED, bad)
    logging.getLogger("paginated_table.evt").info("trigger")
    assert len(bus.errors) == 1


def test_detach_restores_level():
    logger = logging.getLogger("paginated_table")
    logger.setLevel(logging.WARNING)
    svc = LoggingService()
    svc.attach()
    assert logger.level == logging.DEBUG
    svc.detach()
    assert logger.level == logging.WARNING
    logging.getLogger("paginated_table.x").warning("after detach")
    assert svc.recent() == []


def test_export_jsonl(capture, tmp_path):
    svc, _ = capture
    logging.getLogger("paginated_table.a").info("one")
    logging.getLogger("paginated_table.b").error("two")
    out = tmp_path / "logs.jsonl"
    assert svc.export_jsonl(out, min_level="ERROR") == 1
    record = json.loads(out.read_text(encoding="utf-8").splitlines()[0])
    assert record["message"] == "two"
    assert record["component"] == "b"
