from animations.rotating_text import RotatingTextController
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class RotationShutdownHandler(IShutdownHandler):
    """Stops the rotating text timer chain before anything else goes away."""

    def __init__(self, controller: RotatingTextController):
        self.controller = controller

    @property
    def shutdown_priority(self) -> int:
        return 100  # FIRST

    async def shutdown(self) -> None:
        log.info("Stopping rotating text...")
        self.controller.stop()
