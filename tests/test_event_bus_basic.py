from preftree.gui.services.event_bus import EventBus, GUIEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    def h1(e):
        order.append(("h1", e.name))

    def h2(e):
        order.append(("h2", e.name))

    bus.subscribe(GUIEvent.CATEGORY_SELECTED, h1)
    bus.subscribe(GUIEvent.CATEGORY_SELECTED, h2)
    bus.publish(GUIEvent.CATEGORY_SELECTED, {"id": 1})
    assert order == [
        ("h1", GUIEvent.CATEGORY_SELECTED.value),
        ("h2", GUIEvent.CATEGORY_SELECTED.value),
    ]


def test_once_subscription():
    bus = EventBus()
    calls = []
    bus.subscribe(GUIEvent.SEARCH_CHANGED, lambda e: calls.append(e.name), once=True)
    bus.publish(GUIEvent.SEARCH_CHANGED)
    bus.publish(GUIEvent.SEARCH_CHANGED)
    assert calls == [GUIEvent.SEARCH_CHANGED.value]
    assert bus.subscriber_count(GUIEvent.SEARCH_CHANGED) == 0


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(GUIEvent.LOCALE_CHANGED, lambda e: calls.append(1))
    bus.publish(GUIEvent.LOCALE_CHANGED)
    bus.unsubscribe(sub)
    bus.publish(GUIEvent.LOCALE_CHANGED)
    assert calls == [1]
    assert not sub.active


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    def good(e):
        calls.append("ok")

    bus.subscribe(GUIEvent.SEARCH_CHANGED, bad)
    bus.subscribe(GUIEvent.SEARCH_CHANGED, good)
    bus.publish(GUIEvent.SEARCH_CHANGED)
    assert calls == ["ok"]
    assert len(bus.errors) == 1
    bus.clear()
    assert bus.errors == []
