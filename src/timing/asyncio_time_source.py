import asyncio
from typing import Callable, Optional, Set

from models.errors import TimeSourceUnavailableError
from timing.time_source_interface import ITimeSource, ITimerHandle
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TIMING)


class _AsyncioTimer(ITimerHandle):
    """Wraps asyncio.TimerHandle and keeps the owner's pending set accurate"""

    def __init__(self, owner: "AsyncioTimeSource", callback: Callable[[], None]):
        self._owner = owner
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    def _fire(self) -> None:
        self._owner._pending.discard(self)
        self._callback()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._owner._pending.discard(self)


class AsyncioTimeSource(ITimeSource):
    """
    Real wall-clock time source backed by the asyncio event loop.

    Must be created inside a running loop (or given one explicitly);
    otherwise there is nothing to schedule on and construction fails.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise TimeSourceUnavailableError(
                    "AsyncioTimeSource requires a running event loop"
                ) from e
        if loop.is_closed():
            raise TimeSourceUnavailableError("Event loop is closed")

        self._loop = loop
        self._pending: Set[_AsyncioTimer] = set()
        log.debug("Asyncio time source initialized")

    def now_ms(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ITimerHandle:
        timer = _AsyncioTimer(self, callback)
        timer._handle = self._loop.call_later(max(0.0, delay_ms) / 1000.0, timer._fire)
        self._pending.add(timer)
        return timer

    def pending_count(self) -> int:
        return len(self._pending)
