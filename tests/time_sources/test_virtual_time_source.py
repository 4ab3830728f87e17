import pytest

from timing.virtual_time_source import VirtualTimeSource


def test_starts_at_given_time():
    assert VirtualTimeSource().now_ms() == 0.0
    assert VirtualTimeSource(start_ms=500).now_ms() == 500.0


def test_fires_in_due_order():
    clock = VirtualTimeSource()
    fired = []
    clock.call_later(300, lambda: fired.append("late"))
    clock.call_later(100, lambda: fired.append("early"))
    clock.call_later(100, lambda: fired.append("early-second"))

    assert clock.advance(1000) == 3
    assert fired == ["early", "early-second", "late"]
    assert clock.now_ms() == 1000.0


def test_nothing_fires_before_due():
    clock = VirtualTimeSource()
    fired = []
    clock.call_later(100, lambda: fired.append(clock.now_ms()))

    clock.advance(99)
    assert fired == []

    clock.advance(1)
    assert fired == [100.0]


def test_chained_timers_fire_within_one_advance():
    clock = VirtualTimeSource()
    stamps = []

    def tick():
        stamps.append(clock.now_ms())
        if len(stamps) < 5:
            clock.call_later(100, tick)

    clock.call_later(100, tick)
    clock.advance(1000)

    assert stamps == [100.0, 200.0, 300.0, 400.0, 500.0]
    assert clock.peak_pending == 1


def test_cancel_prevents_firing():
    clock = VirtualTimeSource()
    fired = []
    timer = clock.call_later(100, lambda: fired.append(1))

    timer.cancel()
    timer.cancel()

    assert clock.pending_count() == 0
    assert clock.advance(500) == 0
    assert fired == []


def test_cancel_after_fire_is_noop():
    clock = VirtualTimeSource()
    timer = clock.call_later(10, lambda: None)
    clock.advance(10)

    timer.cancel()

    assert clock.pending_count() == 0


def test_advance_backwards_rejected():
    with pytest.raises(ValueError):
        VirtualTimeSource().advance(-1)


def test_advance_to_next():
    clock = VirtualTimeSource()
    clock.call_later(250, lambda: None)

    assert clock.advance_to_next() is True
    assert clock.now_ms() == 250.0
    assert clock.advance_to_next() is False


def test_run_pending_skips_newly_scheduled():
    clock = VirtualTimeSource()
    fired = []

    def first():
        fired.append("first")
        clock.call_later(0, lambda: fired.append("second"))

    clock.call_later(50, first)

    assert clock.run_pending() == 1
    assert fired == ["first"]
    assert clock.pending_count() == 1


def test_counters():
    clock = VirtualTimeSource()
    clock.call_later(10, lambda: None)
    clock.call_later(20, lambda: None)
    clock.advance(30)

    assert clock.fired_count == 2
    assert clock.peak_pending == 2


def test_raising_callback_still_reaches_target():
    clock = VirtualTimeSource()

    def broken():
        raise RuntimeError("boom")

    clock.call_later(10, broken)

    with pytest.raises(RuntimeError):
        clock.advance(100)

    assert clock.now_ms() == 100.0
    assert clock.pending_count() == 0
