from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """Cancels every task still tracked by TaskRegistry."""

    def __init__(self, registry: TaskRegistry = None):
        self.registry = registry or TaskRegistry.instance()

    @property
    def shutdown_priority(self) -> int:
        return 10  # LAST

    async def shutdown(self) -> None:
        cancelled = await self.registry.cancel_all()
        log.debug(f"Task cancellation finished ({cancelled} task(s))")
