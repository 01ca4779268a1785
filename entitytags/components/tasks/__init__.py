"""
Tasks package.
"""

from .task_status_comp import NullTaskStatus, Task, TaskStatusSink

__all__ = ["NullTaskStatus", "Task", "TaskStatusSink"]
