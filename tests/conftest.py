import pytest

from animations.rotating_text import RotatingTextController
from lifecycle.task_registry import TaskRegistry
from models.enums import EventType
from services.event_bus import EventBus
from timing.virtual_time_source import VirtualTimeSource
from utils.logger import configure_logger, LogLevel


WORDS = ["Workplaces", "Apartments", "Gyms", "Businesses"]


@pytest.fixture(autouse=True)
def quiet_logger():
    """Only errors reach the console during tests."""
    configure_logger(LogLevel.ERROR, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def clock():
    return VirtualTimeSource()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def controller(clock, bus):
    return RotatingTextController(clock, bus)


@pytest.fixture
def phase_events(bus):
    """Every PhaseChangedEvent published on the bus, in order."""
    received = []
    bus.subscribe(EventType.PHASE_CHANGED, received.append)
    return received
