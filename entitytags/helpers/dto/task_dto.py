"""
Task domain DTOs.

Rules:
- Import only stdlib and typing (no entitytags.* imports)
- Pure data structures only
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TaskState = Literal["running", "completed", "failed"]


@dataclass(frozen=True)
class TaskStatusEntry:
    """One progress update reported by a running operation."""

    phase: str
    status: str
    timestamp_ms: int
