import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List

from timing.time_source_interface import ITimeSource, ITimerHandle
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TIMING)


@dataclass(order=True)
class _VirtualTimer(ITimerHandle):
    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    owner: "VirtualTimeSource" = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        if self.cancelled or self.fired:
            return
        self.cancelled = True
        self.owner._live -= 1


class VirtualTimeSource(ITimeSource):
    """
    Manually advanced clock for deterministic timing tests.

    Time starts at 0 ms and only moves when advance() / advance_to_next() /
    run_pending() is called. Timers fire in (due time, scheduling order).
    A callback that schedules a new timer due inside the current advance
    window gets fired in the same advance call, so chained timers behave
    exactly as they would on a real clock.

    Instrumentation:
        pending_count(): live timers right now
        peak_pending: highest pending_count() ever observed
        fired_count: total callbacks fired
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: List[_VirtualTimer] = []
        self._seq = itertools.count()
        self._live = 0
        self.peak_pending = 0
        self.fired_count = 0

    # -------------------------------
    # ITimeSource
    # -------------------------------

    def now_ms(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ITimerHandle:
        timer = _VirtualTimer(
            due_ms=self._now + max(0.0, delay_ms),
            seq=next(self._seq),
            callback=callback,
            owner=self,
        )
        heapq.heappush(self._queue, timer)
        self._live += 1
        self.peak_pending = max(self.peak_pending, self._live)
        return timer

    def pending_count(self) -> int:
        return self._live

    # -------------------------------
    # Driving time
    # -------------------------------

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by ms, firing every timer that comes due.

        Returns:
            Number of callbacks fired
        """
        if ms < 0:
            raise ValueError(f"Cannot advance time backwards ({ms} ms)")

        target = self._now + ms
        fired = 0
        try:
            while True:
                timer = self._pop_live()
                if timer is None:
                    break
                if timer.due_ms > target:
                    heapq.heappush(self._queue, timer)
                    break
                self._fire(timer)
                fired += 1
        finally:
            # A raising callback still moves the clock to the target
            self._now = target
        return fired

    def advance_to_next(self) -> bool:
        """Jump to the next pending timer and fire it. False when nothing is pending."""
        timer = self._pop_live()
        if timer is None:
            return False
        self._fire(timer)
        return True

    def run_pending(self) -> int:
        """Fire only the timers pending right now, not ones they schedule."""
        snapshot = [t for t in self._queue if not t.cancelled]
        fired = 0
        for timer in sorted(snapshot):
            if timer.cancelled or timer.fired:
                continue
            self._queue.remove(timer)
            heapq.heapify(self._queue)
            self._fire(timer)
            fired += 1
        return fired

    # -------------------------------
    # Internals
    # -------------------------------

    def _pop_live(self):
        while self._queue:
            timer = heapq.heappop(self._queue)
            if not timer.cancelled:
                return timer
        return None

    def _fire(self, timer: _VirtualTimer) -> None:
        self._now = max(self._now, timer.due_ms)
        timer.fired = True
        self._live -= 1
        self.fired_count += 1
        timer.callback()
