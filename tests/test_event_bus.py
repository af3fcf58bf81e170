from hexsort.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_emit_without_subscribers_is_noop():
    bus = EventBus()
    bus.emit("nobody_listens", value=1)


def test_request_ids_are_unique_per_bus():
    bus = EventBus()
    ids = {bus.next_request_id() for _ in range(5)}
    assert len(ids) == 5
    assert EventBus().next_request_id() == 1
