"""
Helpers package.
"""

from .exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    InvalidSelectionError,
    StoreWriteFailedError,
    UpstreamUnavailableError,
)
from .logging_helper import EntityTagsLogFilter, configure_logging, reset_log_context, set_log_context
from .time_helper import now_ms

__all__ = [
    "AccountNotFoundError",
    "EntityTagsLogFilter",
    "InvalidRequestError",
    "InvalidSelectionError",
    "StoreWriteFailedError",
    "UpstreamUnavailableError",
    "configure_logging",
    "now_ms",
    "reset_log_context",
    "set_log_context",
]
