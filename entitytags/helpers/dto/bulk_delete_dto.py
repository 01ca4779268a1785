"""
Bulk delete DTOs.

Data transfer objects for the bulk entity tag delete operation.
These form cross-layer contracts between interfaces, services, workflows
and components.

Rules:
- Import only stdlib, typing and other DTO modules
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from entitytags.helpers.dto.entity_tags_dto import EntityRef, EntityTags


@dataclass(frozen=True)
class BulkDeleteEntityTagsRequest:
    """Validated request to strip tags (by name or namespace) from many records.

    Exactly one of ids / entity_refs / entity_type selects the records;
    at least one of namespace / tags says what to strip. The validator
    enforces this before any workflow runs.
    """

    ids: tuple[str, ...] = ()
    entity_refs: tuple[EntityRef, ...] = ()
    entity_type: str | None = None
    namespace: str | None = None
    tags: tuple[str, ...] | None = None


# ──────────────────────────────────────────────────────────────────────
# Selection variants (one per selection mode)
# ──────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ByIds:
    """Explicit record ids. One fetch covers the whole selection."""

    ids: tuple[str, ...]


@dataclass(frozen=True)
class ByRefs:
    """Explicit resource references, converted to record ids before fetching."""

    entity_refs: tuple[EntityRef, ...]


@dataclass(frozen=True)
class ByTypeAndNamespace:
    """Scan every record of an entity type that carries a namespace."""

    entity_type: str
    namespace: str


@dataclass(frozen=True)
class ByTypeAndTagRotation:
    """Scan an entity type once per tag name, in order."""

    entity_type: str
    tag_names: tuple[str, ...]


Selection = ByIds | ByRefs | ByTypeAndNamespace | ByTypeAndTagRotation


@dataclass(frozen=True)
class EntityTagsFilter:
    """One search index query. Unset fields do not constrain the query.

    tag_name matches records carrying that tag with any value.
    """

    limit: int
    entity_type: str | None = None
    ids: tuple[str, ...] | None = None
    namespace: str | None = None
    tag_name: str | None = None


@dataclass
class PagePartition:
    """Mutated page split by whether records still carry tags."""

    to_delete: list[EntityTags] = field(default_factory=list)
    to_update: list[EntityTags] = field(default_factory=list)


@dataclass
class BulkDeleteResult:
    """Counts accumulated across every cycle of a bulk delete."""

    cycles: int = 0
    fetched: int = 0
    deleted: int = 0
    updated: int = 0
