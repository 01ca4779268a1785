"""
Logging helpers: identity/role tags, contextual fields and handler setup.

EntityTagsLogFilter derives a readable identity and a role from the module
naming convention used across the codebase:

    entitytags.workflows.entity_tags.bulk_delete_entity_tags_wf
        -> [Bulk Delete Entity Tags] [Workflow]

and appends any context set with set_log_context() (e.g. operation_id).
Third-party loggers keep their full name and an empty role.
"""

from __future__ import annotations

import contextvars
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(entitytags_identity_tag)s %(entitytags_role_tag)s%(context_str)s%(message)s"

_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "[Service]",
    "_wf": "[Workflow]",
    "_comp": "[Component]",
    "_aql": "[AQL]",
    "_es": "[Search]",
    "_helper": "[Helper]",
    "_dto": "[DTO]",
    "_if": "[Interface]",
}

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar("entitytags_log_context", default=None)


def set_log_context(**fields: Any) -> contextvars.Token[dict[str, Any] | None]:
    """Add fields to the logging context of the current thread/task.

    Returns a token; pass it to reset_log_context() to restore the context
    that was in place before this call.
    """
    current = dict(_log_context.get() or {})
    current.update(fields)
    return _log_context.set(current)


def reset_log_context(token: contextvars.Token[dict[str, Any] | None]) -> None:
    _log_context.reset(token)


def _derive_tags(name: str) -> tuple[str, str]:
    last = name.rsplit(".", 1)[-1]
    for suffix, role in _ROLE_SUFFIXES.items():
        if last.endswith(suffix):
            stem = last[: -len(suffix)]
            if not stem:
                break
            identity = " ".join(part.capitalize() for part in stem.split("_") if part)
            return f"[{identity}]", role
    return name, ""


class EntityTagsLogFilter(logging.Filter):
    """Attach identity, role and context attributes to every record.

    Never suppresses a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            identity, role = _derive_tags(str(record.name or ""))
        except Exception:
            identity, role = str(getattr(record, "name", "")), ""
        record.entitytags_identity_tag = identity
        record.entitytags_role_tag = f"{role} " if role else ""

        context = _log_context.get() or {}
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            record.context_str = f"[{pairs}] "
        else:
            record.context_str = ""
        return True


def configure_logging(log_dir: str | None = None, level: int = logging.INFO) -> None:
    """Configure root logging: console plus optional rotating file.

    Args:
        log_dir: Directory for entitytags.log (None disables the file handler)
        level: Root log level
    """
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    handlers.append(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path / "entitytags.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(EntityTagsLogFilter())  # Filter must be on handler, not logger

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logger.debug("Logging configured (log_dir=%s)", log_dir)
