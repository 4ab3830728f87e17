"""
Event models published on the EventBus

Every event carries type, source and a wall-clock timestamp. Payload fields
are exposed through to_data() for middleware and serializers.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from models.enums import AnimationPhase, EventSource, EventType


@dataclass
class Event:
    """Base event class"""
    type: EventType
    source: Optional[EventSource] = None
    timestamp: float = field(default_factory=time.time)

    def to_data(self) -> Dict[str, Any]:
        """Structured payload (everything except type/source/timestamp)"""
        return {
            k: v for k, v in self.__dict__.items()
            if k not in ("type", "source", "timestamp")
        }


@dataclass(init=False)
class RotationStartedEvent(Event):
    handle_id: int = 0
    words: Tuple[str, ...] = ()

    def __init__(self, handle_id: int, words: Tuple[str, ...]):
        super().__init__(type=EventType.ROTATION_STARTED, source=EventSource.ROTATING_TEXT)
        self.handle_id = handle_id
        self.words = words


@dataclass(init=False)
class PhaseChangedEvent(Event):
    """
    Emitted once per phase boundary, after the state update is applied.

    timestamp_ms is the time source clock (virtual or real), not wall time.
    """
    handle_id: int = 0
    word_index: int = 0
    word: str = ""
    phase: AnimationPhase = AnimationPhase.VISIBLE
    timestamp_ms: float = 0.0

    def __init__(
        self,
        handle_id: int,
        word_index: int,
        word: str,
        phase: AnimationPhase,
        timestamp_ms: float
    ):
        super().__init__(type=EventType.PHASE_CHANGED, source=EventSource.ROTATING_TEXT)
        self.handle_id = handle_id
        self.word_index = word_index
        self.word = word
        self.phase = phase
        self.timestamp_ms = timestamp_ms


@dataclass(init=False)
class RotationStoppedEvent(Event):
    handle_id: int = 0

    def __init__(self, handle_id: int):
        super().__init__(type=EventType.ROTATION_STOPPED, source=EventSource.ROTATING_TEXT)
        self.handle_id = handle_id
