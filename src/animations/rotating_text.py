"""
Rotating Text Controller

Owns the (word_index, phase) state of one rotating word and the PhaseClock
that drives it. Renderers either poll snapshot() every frame or subscribe to
PHASE_CHANGED on the EventBus.
"""

import itertools
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from animations.phase_clock import PhaseClock, PhaseClockHandle
from animations.word_cycler import next_index
from models.animation_state import AnimationState, RotatingTextSnapshot
from models.config import RotationTiming
from models.enums import AnimationPhase
from models.errors import EmptyWordListError, InvalidWordError, TimeSourceUnavailableError
from models.events import PhaseChangedEvent, RotationStartedEvent, RotationStoppedEvent
from services.event_bus import EventBus
from timing.time_source_interface import ITimeSource
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

_rotation_ids = itertools.count(1)


@dataclass(frozen=True)
class RotationHandle:
    """Returned by start(); identifies one rotation of one controller"""
    id: int


class RotatingTextController:
    """
    Rotating word state machine

    • One controller = one rotating element = at most one live timer
    • Word index changes only at the ENTERING boundary, together with the phase
    • State is a frozen AnimationState replaced in a single assignment

    Example:
        controller = RotatingTextController(VirtualTimeSource())
        handle = controller.start(["Workplaces", "Apartments", "Gyms"])
        controller.snapshot(handle)   # → RotatingTextSnapshot("Workplaces", VISIBLE)
        controller.stop(handle)
    """

    def __init__(self, time_source: ITimeSource, event_bus: Optional[EventBus] = None):
        if time_source is None or not callable(getattr(time_source, "call_later", None)):
            raise TimeSourceUnavailableError(
                f"Rotating text needs a time source that can schedule callbacks, got {time_source!r}"
            )

        self.time_source = time_source
        self.event_bus = event_bus

        self._handle: Optional[RotationHandle] = None
        self._words: Tuple[str, ...] = ()
        self._state: Optional[AnimationState] = None
        self._clock: Optional[PhaseClock] = None
        self._clock_handle: Optional[PhaseClockHandle] = None

    # ============================================================
    # Lifecycle
    # ============================================================

    def start(self, words: Sequence[str], timing: Optional[RotationTiming] = None) -> RotationHandle:
        """
        Start rotating `words` from index 0 in VISIBLE.

        Raises:
            EmptyWordListError: words is empty (nothing is scheduled)
            InvalidWordError: an entry is not a non-blank string
            TypeError: words is a single string instead of a sequence of words

        If publishing RotationStartedEvent fails the new rotation is torn
        down before the error propagates.
        """
        validated = self._validate_words(words)

        if self._handle is not None:
            log.warn("Rotation already running, stopping old one", handle=self._handle.id)
            self.stop(self._handle)

        handle = RotationHandle(next(_rotation_ids))
        self._handle = handle
        self._words = validated
        self._state = AnimationState(
            word_index=0,
            phase=AnimationPhase.VISIBLE,
            cycle_start_ms=self.time_source.now_ms()
        )
        self._clock = PhaseClock(self.time_source, timing)
        self._clock_handle = self._clock.start(self._on_phase_boundary)

        log.info(
            "Rotation started",
            handle=handle.id,
            words=len(validated),
            cycle_ms=self._clock.timing.cycle_duration_ms
        )
        try:
            self._publish(RotationStartedEvent(handle.id, validated))
        except Exception:
            log.error("Rotation start not delivered, rolling back", handle=handle.id)
            self._teardown()
            raise
        return handle

    def stop(self, handle: Optional[RotationHandle] = None) -> None:
        """
        Cancel the timer chain and discard state.

        No-op when nothing runs, when called twice, or for a stale handle.
        Passing no handle stops whatever is running.
        """
        current = self._handle
        if current is None:
            return
        if handle is not None and handle != current:
            return

        self._teardown()

        log.info("Rotation stopped", handle=current.id)
        self._publish(RotationStoppedEvent(current.id))

    # ============================================================
    # Read side
    # ============================================================

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> Optional[RotationHandle]:
        return self._handle

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def current_state(self, handle: Optional[RotationHandle] = None) -> Optional[AnimationState]:
        """Read-only state of the running rotation, None if stopped or stale."""
        if self._handle is None or (handle is not None and handle != self._handle):
            return None
        return self._state

    def snapshot(self, handle: Optional[RotationHandle] = None) -> Optional[RotatingTextSnapshot]:
        """Word and phase for the renderer, None if stopped or stale."""
        state = self.current_state(handle)
        if state is None:
            return None
        return RotatingTextSnapshot(word=self._words[state.word_index], phase=state.phase)

    # ============================================================
    # Phase clock callback
    # ============================================================

    def _on_phase_boundary(self, phase: AnimationPhase) -> None:
        state = self._state
        handle = self._handle
        if state is None or handle is None:
            return

        if phase == AnimationPhase.ENTERING:
            new_state = replace(
                state,
                word_index=next_index(state.word_index, self._words),
                phase=phase
            )
        elif phase == AnimationPhase.VISIBLE:
            new_state = replace(state, phase=phase, cycle_start_ms=self.time_source.now_ms())
        else:
            new_state = replace(state, phase=phase)

        self._state = new_state
        word = self._words[new_state.word_index]

        log.debug("Phase boundary", handle=handle.id, phase=phase.value, word=word)
        self._publish(PhaseChangedEvent(
            handle_id=handle.id,
            word_index=new_state.word_index,
            word=word,
            phase=phase,
            timestamp_ms=self.time_source.now_ms()
        ))

    # ============================================================
    # Helpers
    # ============================================================

    @staticmethod
    def _validate_words(words: Sequence[str]) -> Tuple[str, ...]:
        if isinstance(words, str):
            raise TypeError(f"words must be a sequence of strings, not a single string: {words!r}")
        if words is None or len(words) == 0:
            raise EmptyWordListError()
        for i, word in enumerate(words):
            if not isinstance(word, str) or not word.strip():
                raise InvalidWordError(i, word)
        return tuple(words)

    def _teardown(self) -> None:
        if self._clock is not None:
            self._clock.cancel(self._clock_handle)

        self._handle = None
        self._words = ()
        self._state = None
        self._clock = None
        self._clock_handle = None

    def _publish(self, event) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)
