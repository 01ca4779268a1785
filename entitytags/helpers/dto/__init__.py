"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

DTOs live in helpers/dto/<domain>_dto.py and form cross-layer contracts
(interfaces → services → workflows → components → persistence).

Rules for DTO modules:
- Import only stdlib and typing (other DTO modules are fine)
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no DB access, no business logic beyond trivial record helpers
"""

from __future__ import annotations

from entitytags.helpers.dto.bulk_delete_dto import (
    BulkDeleteEntityTagsRequest,
    BulkDeleteResult,
    ByIds,
    ByRefs,
    ByTypeAndNamespace,
    ByTypeAndTagRotation,
    EntityTagsFilter,
    PagePartition,
    Selection,
)
from entitytags.helpers.dto.config_dto import ApiConfig, ConfigResult, StoreConfig
from entitytags.helpers.dto.entity_tags_dto import (
    DEFAULT_NAMESPACE,
    EntityRef,
    EntityTag,
    EntityTagMetadata,
    EntityTags,
)
from entitytags.helpers.dto.task_dto import TaskState, TaskStatusEntry

__all__ = [
    "DEFAULT_NAMESPACE",
    "ApiConfig",
    "BulkDeleteEntityTagsRequest",
    "BulkDeleteResult",
    "ByIds",
    "ByRefs",
    "ByTypeAndNamespace",
    "ByTypeAndTagRotation",
    "ConfigResult",
    "EntityRef",
    "EntityTag",
    "EntityTagMetadata",
    "EntityTags",
    "EntityTagsFilter",
    "PagePartition",
    "Selection",
    "StoreConfig",
    "TaskState",
    "TaskStatusEntry",
]
