"""
Task Registry
-------------

Centralized tracking of asyncio tasks created across the application
(event bus coroutine handlers, the runtime entry point).

Features:
- Register tasks with metadata (category, description)
- Track completion state, cancellation, errors
- Introspection API for debugging
- cancel_all() used by the shutdown sequence
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Coroutine, Dict, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    EVENTBUS = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None


class TaskRegistry:
    """
    Global registry for asyncio tasks.

    Responsibilities:
    - Track tasks and metadata
    - Detect and log task failures
    - Expose active tasks to the shutdown coordinator
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._ids = itertools.count(1)

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        task_id = next(self._ids)
        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._records[task_id] = TaskRecord(task=task, info=info)
        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(lambda t, tid=task_id: self._on_task_done(tid, t))
        return task_id

    def _on_task_done(self, task_id: int, task: asyncio.Task) -> None:
        record = self._records.get(task_id)
        if record is None:
            return

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {task_id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(f"[Task {task_id}] FAILED: {exc}", description=record.info.description)
        else:
            log.debug(f"[Task {task_id}] Completed successfully")

    # -----------------------------
    # Public API
    # -----------------------------

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.finished_with_error is not None]

    async def cancel_all(self, timeout: float = 2.0) -> int:
        """Cancel every active task and wait for them to finish. Returns count cancelled."""
        tasks = [r.task for r in self.active() if r.task is not asyncio.current_task()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks, timeout=timeout)
        log.info(f"Cancelled {len(tasks)} tracked task(s)")
        return len(tasks)

    def clear(self) -> None:
        """Forget all records (tests)."""
        self._records.clear()


def create_tracked_task(
    coro: Coroutine[Any, Any, Any],
    category: TaskCategory = TaskCategory.GENERAL,
    description: str = ""
) -> asyncio.Task:
    """
    asyncio.create_task() + registration in TaskRegistry.

    Raises:
        RuntimeError: no running event loop (the coroutine is closed first)
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise

    task = loop.create_task(coro)
    TaskRegistry.instance().register(task, category, description)
    return task
