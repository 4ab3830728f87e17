"""
main_asyncio.py - Rotating text runtime entry point
---------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring event bus, time source and controller
- logging every (word, phase) the controller emits
- graceful shutdown on Ctrl+C / SIGTERM
"""

import sys

# Set UTF-8 encoding for output (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from animations.rotating_text import RotatingTextController
from lifecycle import ShutdownCoordinator
from lifecycle.handlers import RotationShutdownHandler, TaskCancellationHandler
from managers import ConfigManager
from models.enums import EventType, LogCategory, TimeSourceKind
from models.events import PhaseChangedEvent
from services import EventBus, log_middleware
from timing import create_time_source
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def log_renderer(event: PhaseChangedEvent) -> None:
    """Stand-in renderer: one log line per phase boundary"""
    log.info(f"{event.word:<14} [{event.phase.value}]")


async def main() -> None:
    config = ConfigManager()
    app_config = config.load()
    configure_logger(app_config.logging.level, app_config.logging.use_colors)

    settings = app_config.rotating_text
    if settings.time_source != TimeSourceKind.ASYNCIO:
        log.warn(f"time_source '{settings.time_source.value}' cannot run unattended, using asyncio")

    bus = EventBus()
    bus.add_middleware(log_middleware)
    bus.subscribe(EventType.PHASE_CHANGED, log_renderer)

    time_source = create_time_source(TimeSourceKind.ASYNCIO)
    controller = RotatingTextController(time_source, bus)

    coordinator = ShutdownCoordinator()
    coordinator.register(RotationShutdownHandler(controller))
    coordinator.register(TaskCancellationHandler())
    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    controller.start(settings.words, settings.timing)
    log.info(f"{settings.words[0]:<14} [visible]")
    log.info("🏁 Rotating text running. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()
    log.info("👋 Rotating text shut down cleanly.")


def run() -> None:
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run()
