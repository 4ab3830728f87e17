"""
Phase Clock

Drives the endless VISIBLE → EXITING → ENTERING → VISIBLE cycle with a chain
of single-shot timers. Each boundary schedules exactly one timer for the
next boundary, so a running clock owns at most one live timer.
"""

import itertools
from typing import Callable, Dict, Optional

from models.config import RotationTiming
from models.enums import AnimationPhase
from models.errors import PhaseClockError
from timing.time_source_interface import ITimeSource, ITimerHandle
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

_handle_ids = itertools.count(1)


class PhaseClockHandle:
    """Identifies one timer chain started by PhaseClock.start()"""

    def __init__(self):
        self.id = next(_handle_ids)
        self.active = True
        self._timer: Optional[ITimerHandle] = None

    def __repr__(self) -> str:
        return f"PhaseClockHandle(id={self.id}, active={self.active})"


class PhaseClock:
    """
    Single-chain phase scheduler.

    Example:
        clock = PhaseClock(time_source, RotationTiming(cycle_duration_ms=3000))
        handle = clock.start(lambda phase: print(phase))
        ...
        clock.cancel(handle)   # no callbacks after this returns
    """

    def __init__(self, time_source: ITimeSource, timing: Optional[RotationTiming] = None):
        self.time_source = time_source
        self.timing = timing or RotationTiming()
        self._durations: Dict[AnimationPhase, float] = self.timing.phase_durations()
        self._handle: Optional[PhaseClockHandle] = None
        self._on_boundary: Optional[Callable[[AnimationPhase], None]] = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None and self._handle.active

    def start(self, on_phase_boundary: Callable[[AnimationPhase], None]) -> PhaseClockHandle:
        """
        Start the cycle in VISIBLE; first boundary (→ EXITING) fires after
        the VISIBLE window.

        Raises:
            PhaseClockError: if a chain from this clock is still running
        """
        if self.is_running:
            raise PhaseClockError("PhaseClock is already running; cancel it before starting again")

        handle = PhaseClockHandle()
        self._handle = handle
        self._on_boundary = on_phase_boundary
        self._schedule(handle, AnimationPhase.VISIBLE)

        log.debug(
            "Phase clock started",
            handle=handle.id,
            durations_ms={p.value: round(d, 3) for p, d in self._durations.items()}
        )
        return handle

    def cancel(self, handle: Optional[PhaseClockHandle]) -> None:
        """Stop the chain. Stale or already-cancelled handles are ignored."""
        if handle is None or not handle.active:
            return

        handle.active = False
        if handle._timer is not None:
            handle._timer.cancel()
            handle._timer = None

        if self._handle is handle:
            self._handle = None
            self._on_boundary = None
        log.debug("Phase clock cancelled", handle=handle.id)

    # ------------------------------------------------------------
    # Internal chain
    # ------------------------------------------------------------

    def _schedule(self, handle: PhaseClockHandle, current: AnimationPhase) -> None:
        """Arm the one timer that ends the `current` phase window."""
        upcoming = current.next
        handle._timer = self.time_source.call_later(
            self._durations[current],
            lambda: self._on_timer(handle, upcoming)
        )

    def _on_timer(self, handle: PhaseClockHandle, phase: AnimationPhase) -> None:
        if not handle.active or handle is not self._handle:
            return

        handle._timer = None
        # Arm the next boundary before notifying, so a listener that cancels
        # the clock cancels the fresh timer as well
        self._schedule(handle, phase)

        callback = self._on_boundary
        if callback is None:
            return
        try:
            callback(phase)
        except Exception as e:
            log.error(
                "Phase boundary callback failed",
                handle=handle.id,
                phase=phase.value,
                error=f"{type(e).__name__}: {e}"
            )
