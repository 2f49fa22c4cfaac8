"""Event bus"""

from core.events import EventBus, OrreryEvent


def test_delivery_in_subscription_order():
    bus = EventBus()
    calls = []
    bus.subscribe(OrreryEvent.SELECT, lambda p: calls.append(("a", p)))
    bus.subscribe(OrreryEvent.SELECT, lambda p: calls.append(("b", p)))
    assert bus.emit(OrreryEvent.SELECT, 7) == 2
    assert calls == [("a", 7), ("b", 7)]


def test_events_are_independent():
    bus = EventBus()
    calls = []
    bus.subscribe(OrreryEvent.HOVER, calls.append)
    assert bus.emit(OrreryEvent.CLOSE_PANEL) == 0
    assert calls == []


def test_string_names_accepted():
    bus = EventBus()
    calls = []
    bus.subscribe("tour_changed", calls.append)
    bus.emit(OrreryEvent.TOUR_CHANGED, True)
    assert calls == [True]


def test_unsubscribe():
    bus = EventBus()
    calls = []
    bus.subscribe(OrreryEvent.HOVER, calls.append)
    bus.unsubscribe(OrreryEvent.HOVER, calls.append)
    bus.emit(OrreryEvent.HOVER, "EARTH")
    assert calls == []


def test_failing_handler_does_not_block_others(capsys):
    bus = EventBus()
    calls = []

    def broken(_):
        raise RuntimeError("handler down")

    bus.subscribe(OrreryEvent.TIME_SCALE_CHANGED, broken)
    bus.subscribe(OrreryEvent.TIME_SCALE_CHANGED, calls.append)
    assert bus.emit(OrreryEvent.TIME_SCALE_CHANGED, 2.0) == 1
    assert calls == [2.0]
    assert "handler down" in capsys.readouterr().out
