import asyncio
from typing import Optional

from models.enums import TimeSourceKind
from timing.time_source_interface import ITimeSource
from timing.asyncio_time_source import AsyncioTimeSource
from timing.virtual_time_source import VirtualTimeSource


def create_time_source(
    kind: TimeSourceKind = TimeSourceKind.ASYNCIO,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> ITimeSource:
    if kind == TimeSourceKind.VIRTUAL:
        return VirtualTimeSource()
    return AsyncioTimeSource(loop)
