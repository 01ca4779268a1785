"""Task status component - progress reporting for long-running operations.

Operations receive a TaskStatusSink explicitly and call update_status()
after each phase. Reporting is observational only: it never changes control
flow, and a sink must not raise.
"""

from __future__ import annotations

import logging
import uuid
from typing import Protocol

from entitytags.helpers.dto.task_dto import TaskState, TaskStatusEntry
from entitytags.helpers.time_helper import now_ms

logger = logging.getLogger(__name__)


class TaskStatusSink(Protocol):
    """Anything that accepts progress updates."""

    def update_status(self, phase: str, status: str) -> None: ...


class Task:
    """In-memory task: records every status update and logs it.

    Attributes:
        id: Task identifier (random UUID unless given)
        history: Every update, oldest first
        state: running / completed / failed
    """

    def __init__(self, task_id: str | None = None) -> None:
        self.id = task_id or str(uuid.uuid4())
        self.history: list[TaskStatusEntry] = []
        self.state: TaskState = "running"

    def update_status(self, phase: str, status: str) -> None:
        entry = TaskStatusEntry(phase=phase, status=status, timestamp_ms=now_ms())
        self.history.append(entry)
        logger.info(f"[task {self.id}] {phase}: {status}")

    @property
    def status(self) -> TaskStatusEntry | None:
        """Latest update, or None before the first one."""
        return self.history[-1] if self.history else None

    def complete(self, phase: str, status: str = "Orchestration completed.") -> None:
        self.update_status(phase, status)
        self.state = "completed"

    def fail(self, phase: str, status: str) -> None:
        self.update_status(phase, status)
        self.state = "failed"


class NullTaskStatus:
    """Sink that drops every update (for callers that do not track progress)."""

    def update_status(self, phase: str, status: str) -> None:
        return None
