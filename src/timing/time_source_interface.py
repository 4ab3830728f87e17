from typing import Callable, Protocol


class ITimerHandle(Protocol):
    """A single scheduled callback"""

    def cancel(self) -> None:
        """Cancel the callback. Safe to call more than once or after it fired."""
        ...


class ITimeSource(Protocol):
    """
    Scheduling primitive used by PhaseClock.

    Implementations must never run a callback after its handle was
    cancelled, and must run callbacks on the caller's thread.
    """

    # -------------------------------
    # Clock
    # -------------------------------

    def now_ms(self) -> float:
        """Current time in milliseconds (monotonic, arbitrary origin)"""
        ...

    # -------------------------------
    # Scheduling
    # -------------------------------

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ITimerHandle:
        """Run callback once after delay_ms"""
        ...

    # -------------------------------
    # Debug
    # -------------------------------

    def pending_count(self) -> int:
        """Number of callbacks scheduled and not yet fired or cancelled"""
        ...
