"""
Shutdown handlers for application components.

Each handler is responsible for shutting down one aspect of the application.
They are called in priority order by ShutdownCoordinator.
"""

from .rotation_shutdown_handler import RotationShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "RotationShutdownHandler",
    "TaskCancellationHandler",
]
