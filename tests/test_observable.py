from preftree.model import ObservableValue, ValueChange


def test_notifies_on_change_only():
    value = ObservableValue("a")
    seen = []
    value.subscribe(seen.append)
    value.set("a")
    value.set("b")
    assert seen == [ValueChange(old="a", new="b")]
    assert value.value == "b"


def test_unsubscribe_and_cancel():
    value = ObservableValue(0)
    seen = []
    first = value.subscribe(seen.append)
    second = value.subscribe(seen.append)
    value.unsubscribe(first)
    second.cancel()
    value.set(1)
    assert seen == []
    assert value.subscriber_count() == 0


def test_failing_subscriber_is_isolated():
    value = ObservableValue(0)
    seen = []

    def bad(change):
        raise ValueError("boom")

    value.subscribe(bad)
    value.subscribe(seen.append)
    value.set(1)
    assert len(seen) == 1
    assert len(value.errors) == 1


def test_recorded_errors_are_bounded():
    from preftree.model.observable import MAX_RECORDED_ERRORS

    value = ObservableValue(0)

    def bad(change):
        raise ValueError(change.new)

    value.subscribe(bad)
    for n in range(1, MAX_RECORDED_ERRORS + 21):
        value.set(n)
    errors = value.errors
    assert len(errors) == MAX_RECORDED_ERRORS
    assert errors[-1][0].new == MAX_RECORDED_ERRORS + 20
