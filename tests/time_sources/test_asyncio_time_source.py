import asyncio

import pytest

from animations.rotating_text import RotatingTextController
from models.config import RotationTiming
from models.enums import AnimationPhase, EventType, TimeSourceKind
from models.errors import TimeSourceUnavailableError
from services.event_bus import EventBus
from timing.asyncio_time_source import AsyncioTimeSource
from timing.time_source_factory import create_time_source
from timing.virtual_time_source import VirtualTimeSource


def test_requires_running_loop():
    with pytest.raises(TimeSourceUnavailableError):
        AsyncioTimeSource()


def test_closed_loop_rejected():
    loop = asyncio.new_event_loop()
    loop.close()
    with pytest.raises(TimeSourceUnavailableError):
        AsyncioTimeSource(loop)


def test_factory_builds_virtual_without_loop():
    assert isinstance(create_time_source(TimeSourceKind.VIRTUAL), VirtualTimeSource)


@pytest.mark.asyncio
async def test_call_later_fires_and_clears_pending():
    source = AsyncioTimeSource()
    fired = asyncio.Event()

    source.call_later(10, fired.set)
    assert source.pending_count() == 1

    await asyncio.wait_for(fired.wait(), timeout=1.0)
    assert source.pending_count() == 0


@pytest.mark.asyncio
async def test_cancel_removes_pending():
    source = AsyncioTimeSource()
    fired = []

    timer = source.call_later(10, lambda: fired.append(1))
    timer.cancel()
    await asyncio.sleep(0.05)

    assert fired == []
    assert source.pending_count() == 0


@pytest.mark.asyncio
async def test_real_clock_rotation_order():
    source = create_time_source(TimeSourceKind.ASYNCIO)
    bus = EventBus()
    entering = []
    bus.subscribe(
        EventType.PHASE_CHANGED,
        lambda e: entering.append(e.word),
        filter_fn=lambda e: e.phase == AnimationPhase.ENTERING
    )
    controller = RotatingTextController(source, bus)

    controller.start(["A", "B", "C"], RotationTiming(cycle_duration_ms=40))
    for _ in range(100):
        if len(entering) >= 4:
            break
        await asyncio.sleep(0.02)
    controller.stop()

    assert entering[:4] == ["B", "C", "A", "B"]
    assert source.pending_count() == 0
