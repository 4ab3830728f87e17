"""
Enums for the rotating text state machine
"""

from enum import Enum, auto


class AnimationPhase(Enum):
    """
    Visual phase of the rotating word

    VISIBLE: Word is at rest and readable
    EXITING: Current word is leaving
    ENTERING: Next word is arriving

    Transitions are strictly cyclic: VISIBLE → EXITING → ENTERING → VISIBLE
    """
    VISIBLE = "visible"
    EXITING = "exiting"
    ENTERING = "entering"

    @property
    def next(self) -> "AnimationPhase":
        """Phase that follows this one in the cycle"""
        return _PHASE_CYCLE[self]


_PHASE_CYCLE = {
    AnimationPhase.VISIBLE: AnimationPhase.EXITING,
    AnimationPhase.EXITING: AnimationPhase.ENTERING,
    AnimationPhase.ENTERING: AnimationPhase.VISIBLE,
}


class TimeSourceKind(Enum):
    """Scheduling backends for the phase clock"""
    ASYNCIO = "asyncio"   # Real wall clock (event loop call_later)
    VIRTUAL = "virtual"   # Manually advanced clock (tests, offline playback)


class EventType(Enum):
    """Event types published by the rotating text controller"""
    ROTATION_STARTED = auto()
    PHASE_CHANGED = auto()
    ROTATION_STOPPED = auto()


class EventSource(Enum):
    """Event source identifiers for application events"""
    ROTATING_TEXT = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ANIMATION = auto()   # Rotation start/stop, phase boundaries
    TIMING = auto()      # Time sources, timer scheduling
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors

    SHUTDOWN = auto()
    LIFECYCLE = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
