from paginated_table.services.event_bus import EventBus, TableEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []
    bus.subscribe(TableEvent.PAGE_CHANGED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(TableEvent.PAGE_CHANGED, {"page": 2})
    assert received == [(TableEvent.PAGE_CHANGED.value, {"page": 2})]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(TableEvent.VIEW_RENDERED, incr, once=True)
    bus.publish(TableEvent.VIEW_RENDERED)
    bus.publish(TableEvent.VIEW_RENDERED)
    assert count == 1
    assert bus.subscriber_count(TableEvent.VIEW_RENDERED) == 0


def test_error_isolation_and_order():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", lambda _: order.append("good"))
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1


def test_unsubscribe():
    bus = EventBus()
    hits = []
    sub = bus.subscribe("x", lambda e: hits.append(e))
    bus.unsubscribe(sub)
    bus.publish("x")
    assert hits == []
    assert not sub.active


def test_handler_may_unsubscribe_others_during_dispatch():
    bus = EventBus()
    seen = []
    later = None

    def first(_):
        seen.append("first")
        bus.unsubscribe(later)

    bus.subscribe(TableEvent.FILTERS_CHANGED, first)
    later = bus.subscribe(TableEvent.FILTERS_CHANGED, lambda _: seen.append("later"))
    bus.publish(TableEvent.FILTERS_CHANGED)
    assert seen == ["first"]
    bus.clear()
    assert bus.subscriber_count(TableEvent.FILTERS_CHANGED) == 0
