"""
Event Bus - Central event routing system

Implements pub-sub pattern:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)

Dispatch is synchronous because events are published from timer callbacks
that must not yield. Coroutine handlers are scheduled as tracked tasks on
the running loop.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from lifecycle.task_registry import TaskCategory, create_tracked_task
from models.events import Event
from models.enums import EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], object]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Central event bus for pub-sub event handling

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Middleware pipeline (logging, blocking)
    - Async/sync handler support (auto-detected)
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()
        bus.subscribe(
            EventType.PHASE_CHANGED,
            renderer.on_phase_changed,
            filter_fn=lambda e: e.phase == AnimationPhase.ENTERING
        )
        bus.publish(PhaseChangedEvent(...))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Callable[[Event], Optional[Event]]] = []
        self._event_history: List[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], object],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        entries = self._handlers.setdefault(event_type, [])
        entries.append(EventHandler(handler, priority, filter_fn))
        # Stable sort keeps registration order among equal priorities
        entries.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], object]) -> bool:
        """Remove every registration of handler for event_type. Returns True if any was removed."""
        entries = self._handlers.get(event_type, [])
        remaining = [h for h in entries if h.handler != handler]
        self._handlers[event_type] = remaining
        return len(remaining) != len(entries)

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to event processing pipeline

        Middleware can modify events (return modified event), block events
        (return None) or just log them. Runs in registration order.
        """
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=middleware.__name__)

    def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers

        Flow:
        1. Apply middleware (can modify or block event)
        2. Save to event history
        3. Execute handlers by priority (high → low), honouring filters
        4. Catch and log handler exceptions
        """
        for middleware in self._middleware:
            processed = middleware(event)
            if processed is None:
                return
            event = processed

        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        # Copy: handlers may (un)subscribe while we iterate
        for entry in list(self._handlers.get(event.type, [])):
            if entry.filter_fn and not entry.filter_fn(event):
                continue
            self._dispatch(entry, event)

    def _dispatch(self, entry: EventHandler, event: Event) -> None:
        name = getattr(entry.handler, "__name__", repr(entry.handler))
        try:
            if asyncio.iscoroutinefunction(entry.handler):
                create_tracked_task(
                    entry.handler(event),
                    category=TaskCategory.EVENTBUS,
                    description=f"{name} ← {event.type.name}"
                )
            else:
                entry.handler(event)
        except Exception as e:
            log.error(
                f"Event handler failed: {name} for {event.type.name}",
                error=f"{type(e).__name__}: {e}"
            )

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Recent events, newest last"""
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()
