"""
Rotation state models

AnimationState is owned by RotatingTextController and replaced as a whole on
every boundary, so readers never see a half-applied update.
"""

from dataclasses import dataclass
from typing import Any, Dict

from models.enums import AnimationPhase


@dataclass(frozen=True)
class AnimationState:
    """
    Current position of a running rotation

    Attributes:
        word_index: Index into the word list (always 0 <= index < len(words))
        phase: Current visual phase
        cycle_start_ms: Time source timestamp when the current cycle began
                        (diagnostics only, never used for phase decisions)
    """
    word_index: int
    phase: AnimationPhase
    cycle_start_ms: float


@dataclass(frozen=True)
class RotatingTextSnapshot:
    """What a renderer needs: the word to draw and its phase"""
    word: str
    phase: AnimationPhase

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "phase": self.phase.value}
