"""
Lifecycle subsystem
-------------------

Exports the public API for:
- graceful shutdown
- task tracking & introspection

External code should import from:
    from lifecycle import ShutdownCoordinator, TaskRegistry
    from lifecycle.handlers import RotationShutdownHandler
"""

from .shutdown_coordinator import ShutdownCoordinator
from .task_registry import TaskRegistry, TaskCategory, TaskInfo, create_tracked_task
from .shutdown_protocol import IShutdownHandler

__all__ = [
    "ShutdownCoordinator",
    "TaskRegistry",
    "TaskCategory",
    "TaskInfo",
    "create_tracked_task",
    "IShutdownHandler",
]
