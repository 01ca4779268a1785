"""Entity tag DTOs - tag records attached to cloud resources.

This module defines:
- EntityRef: Reference to the cloud resource that owns a tag record
- EntityTag: Single name/namespace/value annotation
- EntityTagMetadata: Audit info for one tag (who/when)
- EntityTags: The record itself (one per cloud resource)

Usage:
    from entitytags.helpers.dto.entity_tags_dto import EntityTags

    # From a stored document (durable store or search index hit)
    record = EntityTags.from_dict(doc)

    # Strip a tag in place
    record.remove_tag("owner")

    # Back to a document
    doc = record.to_dict()

Documents use the camelCase field names the upstream services exchange
(entityRef, tagsMetadata, lastModified, ...). Python attributes are snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Namespace applied to tags stored without one
DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True)
class EntityRef:
    """Reference to the cloud resource a tag record belongs to."""

    entity_type: str | None = None  # e.g., "servergroup", "cluster"
    entity_id: str | None = None
    cloud_provider: str | None = None
    application: str | None = None
    account: str | None = None
    account_id: str | None = None
    region: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntityRef:
        """Create EntityRef from camelCase document (unknown keys become attributes)."""
        known = {
            "entityType",
            "entityId",
            "cloudProvider",
            "application",
            "account",
            "accountId",
            "region",
            "attributes",
        }
        attributes = dict(data.get("attributes") or {})
        attributes.update({k: v for k, v in data.items() if k not in known})
        return cls(
            entity_type=data.get("entityType"),
            entity_id=data.get("entityId"),
            cloud_provider=data.get("cloudProvider"),
            application=data.get("application"),
            account=data.get("account"),
            account_id=data.get("accountId"),
            region=data.get("region"),
            attributes=attributes,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to camelCase document, omitting unset fields."""
        doc: dict[str, Any] = {
            "entityType": self.entity_type,
            "entityId": self.entity_id,
            "cloudProvider": self.cloud_provider,
            "application": self.application,
            "account": self.account,
            "accountId": self.account_id,
            "region": self.region,
        }
        doc = {k: v for k, v in doc.items() if v is not None}
        if self.attributes:
            doc["attributes"] = dict(self.attributes)
        return doc


@dataclass(frozen=True)
class EntityTag:
    """Single tag: unique name within its record, a namespace, an opaque value."""

    name: str
    namespace: str = DEFAULT_NAMESPACE
    value: Any = None
    value_type: str | None = None  # e.g., "object", "literal"
    category: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntityTag:
        return cls(
            name=data["name"],
            namespace=data.get("namespace") or DEFAULT_NAMESPACE,
            value=data.get("value"),
            value_type=data.get("valueType"),
            category=data.get("category"),
        )

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"name": self.name, "namespace": self.namespace, "value": self.value}
        if self.value_type is not None:
            doc["valueType"] = self.value_type
        if self.category is not None:
            doc["category"] = self.category
        return doc


@dataclass(frozen=True)
class EntityTagMetadata:
    """Audit information for a single tag, keyed by tag name."""

    name: str
    created: int | None = None
    last_modified: int | None = None
    created_by: str | None = None
    last_modified_by: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntityTagMetadata:
        return cls(
            name=data["name"],
            created=data.get("created"),
            last_modified=data.get("lastModified"),
            created_by=data.get("createdBy"),
            last_modified_by=data.get("lastModifiedBy"),
        )

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "name": self.name,
            "created": self.created,
            "lastModified": self.last_modified,
            "createdBy": self.created_by,
            "lastModifiedBy": self.last_modified_by,
        }
        return {k: v for k, v in doc.items() if v is not None}


@dataclass
class EntityTags:
    """All tags attached to one cloud resource.

    Mutable on purpose: bulk operations fetch a page of records, strip tags
    in place, then persist or delete each record.

    Invariant: tag names are unique within a record. A record with no tags
    is never persisted; it gets deleted instead.
    """

    id: str
    entity_ref: EntityRef = field(default_factory=EntityRef)
    tags: list[EntityTag] = field(default_factory=list)
    tags_metadata: list[EntityTagMetadata] = field(default_factory=list)
    id_pattern: str | None = None
    last_modified: int | None = None
    last_modified_by: str | None = None

    def __post_init__(self) -> None:
        """Collapse duplicate tag names (last one wins, first position kept)."""
        by_name: dict[str, EntityTag] = {}
        for tag in self.tags:
            by_name[tag.name] = tag
        if len(by_name) != len(self.tags):
            self.tags = list(by_name.values())

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]

    def get_tag(self, name: str) -> EntityTag | None:
        return next((tag for tag in self.tags if tag.name == name), None)

    def remove_tag(self, name: str) -> bool:
        """Remove a tag and its metadata by name.

        Returns:
            True if a tag was removed, False if the name was absent (no-op)
        """
        remaining = [tag for tag in self.tags if tag.name != name]
        removed = len(remaining) != len(self.tags)
        self.tags = remaining
        self.tags_metadata = [meta for meta in self.tags_metadata if meta.name != name]
        return removed

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntityTags:
        """Create EntityTags from a stored document.

        Accepts ArangoDB documents (``_key`` but no ``id``) as well as
        search index sources.
        """
        record_id = data.get("id") or data.get("_key")
        if not record_id:
            msg = "Entity tags document has no id"
            raise ValueError(msg)
        return cls(
            id=str(record_id),
            entity_ref=EntityRef.from_dict(data.get("entityRef") or {}),
            tags=[EntityTag.from_dict(t) for t in data.get("tags") or []],
            tags_metadata=[EntityTagMetadata.from_dict(m) for m in data.get("tagsMetadata") or []],
            id_pattern=data.get("idPattern"),
            last_modified=data.get("lastModified"),
            last_modified_by=data.get("lastModifiedBy"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the document shape shared by both stores."""
        doc: dict[str, Any] = {
            "id": self.id,
            "idPattern": self.id_pattern,
            "entityRef": self.entity_ref.to_dict(),
            "tags": [tag.to_dict() for tag in self.tags],
            "tagsMetadata": [meta.to_dict() for meta in self.tags_metadata],
            "lastModified": self.last_modified,
            "lastModifiedBy": self.last_modified_by,
        }
        return {k: v for k, v in doc.items() if v is not None}
