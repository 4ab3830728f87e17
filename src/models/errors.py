"""
Error types raised by the rotating text subsystem
"""


class RotatingTextError(Exception):
    """Base class for all rotating text errors"""


class RotationConfigError(RotatingTextError, ValueError):
    """Invalid input supplied when starting a rotation"""


class EmptyWordListError(RotationConfigError):
    """Rotation started with a zero-length word list"""

    def __init__(self):
        super().__init__("Rotating text needs at least one word")


class InvalidWordError(RotationConfigError):
    """Word list contains a blank or non-string entry"""

    def __init__(self, index: int, value: object):
        self.index = index
        self.value = value
        super().__init__(f"Word at index {index} must be a non-empty string, got {value!r}")


class TimeSourceUnavailableError(RotatingTextError, RuntimeError):
    """Host environment cannot schedule callbacks"""


class PhaseClockError(RotatingTextError, RuntimeError):
    """PhaseClock used in a way that would create a second timer chain"""
