from .time_source_interface import ITimeSource, ITimerHandle
from .asyncio_time_source import AsyncioTimeSource
from .virtual_time_source import VirtualTimeSource
from .time_source_factory import create_time_source


__all__ = [
    "ITimeSource",
    "ITimerHandle",
    "AsyncioTimeSource",
    "VirtualTimeSource",
    "create_time_source",
]
