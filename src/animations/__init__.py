"""
Rotating text animation

Provides the state machine that cycles a word list through
VISIBLE → EXITING → ENTERING phases.

- word_cycler: bounds-checked index stepping
- phase_clock: single-chain phase scheduler
- rotating_text: controller owning state + clock lifecycle
- sequence_observer: records and validates the emitted sequence
"""

from .word_cycler import next_index
from .phase_clock import PhaseClock, PhaseClockHandle
from .rotating_text import RotatingTextController, RotationHandle
from .sequence_observer import WordSequenceObserver

__all__ = [
    "next_index",
    "PhaseClock",
    "PhaseClockHandle",
    "RotatingTextController",
    "RotationHandle",
    "WordSequenceObserver",
]
