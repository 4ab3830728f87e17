"""
Configuration models - Pydantic schemas for config.yaml

Validated at load time so a bad YAML file fails loudly instead of producing
a rotation with impossible timing.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.enums import AnimationPhase, LogLevel, TimeSourceKind

DEFAULT_WORDS = ("Workplaces", "Apartments", "Gyms", "Businesses")
DEFAULT_CYCLE_DURATION_MS = 3000

# Ratios may drift by float rounding when read from YAML
_RATIO_SUM_TOLERANCE = 1e-6

# Phase windows are rounded so boundaries land on the exact configured share
_WINDOW_PRECISION = 9


class RotationTiming(BaseModel):
    """
    Timing of one full VISIBLE → EXITING → ENTERING cycle

    The three windows are ordered, non-overlapping and sum to
    cycle_duration_ms. ENTERING takes whatever is left after the other two
    so float rounding never makes the cycle longer or shorter than configured.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "cycle_duration_ms": 3000,
                "visible_ratio": 0.8,
                "exiting_ratio": 0.1,
                "entering_ratio": 0.1,
            }
        },
    )

    cycle_duration_ms: float = Field(
        DEFAULT_CYCLE_DURATION_MS, gt=0,
        description="Total duration of one cycle in milliseconds"
    )
    visible_ratio: float = Field(0.8, gt=0, lt=1, description="Share of the cycle the word rests")
    exiting_ratio: float = Field(0.1, gt=0, lt=1, description="Share of the cycle spent leaving")
    entering_ratio: float = Field(0.1, gt=0, lt=1, description="Share of the cycle spent arriving")

    @model_validator(mode="after")
    def _ratios_fill_cycle(self) -> "RotationTiming":
        total = self.visible_ratio + self.exiting_ratio + self.entering_ratio
        if abs(total - 1.0) > _RATIO_SUM_TOLERANCE:
            raise ValueError(f"Phase ratios must sum to 1.0, got {total:.6f}")
        return self

    def phase_durations(self) -> Dict[AnimationPhase, float]:
        """Duration of each phase window in milliseconds"""
        visible = round(self.cycle_duration_ms * self.visible_ratio, _WINDOW_PRECISION)
        exiting = round(self.cycle_duration_ms * self.exiting_ratio, _WINDOW_PRECISION)
        entering = round(self.cycle_duration_ms - visible - exiting, _WINDOW_PRECISION)
        return {
            AnimationPhase.VISIBLE: visible,
            AnimationPhase.EXITING: exiting,
            AnimationPhase.ENTERING: entering,
        }


class RotatingTextSettings(BaseModel):
    """Words and timing for the rotating hero text"""
    model_config = ConfigDict(frozen=True)

    words: List[str] = Field(default_factory=lambda: list(DEFAULT_WORDS), min_length=1)
    timing: RotationTiming = Field(default_factory=RotationTiming)
    time_source: TimeSourceKind = TimeSourceKind.ASYNCIO

    @field_validator("words")
    @classmethod
    def _words_not_blank(cls, words: List[str]) -> List[str]:
        cleaned = [w.strip() for w in words]
        for i, word in enumerate(cleaned):
            if not word:
                raise ValueError(f"Word at index {i} is blank")
        return cleaned


class LoggingSettings(BaseModel):
    """Logger configuration"""
    model_config = ConfigDict(frozen=True)

    level: LogLevel = LogLevel.INFO
    use_colors: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _level_from_name(cls, value):
        if isinstance(value, str):
            try:
                return LogLevel[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value}") from None
        return value


class AppConfig(BaseModel):
    """Root of config.yaml"""
    model_config = ConfigDict(frozen=True)

    rotating_text: RotatingTextSettings = Field(default_factory=RotatingTextSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
