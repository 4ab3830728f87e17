"""
Models package - Data models for the rotating text controller
"""

from .enums import AnimationPhase, TimeSourceKind, EventType, EventSource, LogLevel, LogCategory
from .animation_state import AnimationState, RotatingTextSnapshot
from .config import RotationTiming, RotatingTextSettings, LoggingSettings, AppConfig

__all__ = [
    'AnimationPhase',
    'TimeSourceKind',
    'EventType',
    'EventSource',
    'LogLevel',
    'LogCategory',
    'AnimationState',
    'RotatingTextSnapshot',
    'RotationTiming',
    'RotatingTextSettings',
    'LoggingSettings',
    'AppConfig',
]
