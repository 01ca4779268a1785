"""
Entity tags API types.

External API contracts for bulk entity tag endpoints.
These are Pydantic models that decode raw requests into internal DTOs and
transform internal DTOs into API responses.

Architecture:
- These types are owned by the interface layer
- They define what external clients see (REST API shapes)
- Requests convert via .to_dto(); responses via .from_dto()
- Services and lower layers should NOT import from this module
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing_extensions import Self

from entitytags.helpers.dto.bulk_delete_dto import BulkDeleteEntityTagsRequest, BulkDeleteResult
from entitytags.helpers.dto.entity_tags_dto import EntityRef
from entitytags.helpers.dto.task_dto import TaskStatusEntry
from entitytags.helpers.exceptions import InvalidRequestError

# ──────────────────────────────────────────────────────────────────────
# Request Types
# ──────────────────────────────────────────────────────────────────────


class EntityRefModel(BaseModel):
    """Reference to a cloud resource. Extra fields are kept as attributes."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    entity_type: str | None = Field(default=None, alias="entityType")
    entity_id: str | None = Field(default=None, alias="entityId")
    cloud_provider: str | None = Field(default=None, alias="cloudProvider")
    application: str | None = None
    account: str | None = None
    account_id: str | None = Field(default=None, alias="accountId")
    region: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    def to_dto(self) -> EntityRef:
        attributes = dict(self.attributes)
        attributes.update(self.model_extra or {})
        return EntityRef(
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            cloud_provider=self.cloud_provider,
            application=self.application,
            account=self.account,
            account_id=self.account_id,
            region=self.region,
            attributes=attributes,
        )


class BulkDeleteEntityTagsRequestModel(BaseModel):
    """
    Bulk delete request body.

    Accepts camelCase (entityRefs, entityType) or snake_case keys.
    Unknown keys are ignored; missing collections default to empty.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ids: list[str] = Field(default_factory=list)
    entity_refs: list[EntityRefModel] = Field(default_factory=list, alias="entityRefs")
    entity_type: str | None = Field(default=None, alias="entityType")
    namespace: str | None = None
    tags: list[str] | None = None

    def to_dto(self) -> BulkDeleteEntityTagsRequest:
        return BulkDeleteEntityTagsRequest(
            ids=tuple(self.ids),
            entity_refs=tuple(ref.to_dto() for ref in self.entity_refs),
            entity_type=self.entity_type,
            namespace=self.namespace,
            tags=tuple(self.tags) if self.tags is not None else None,
        )


def decode_bulk_delete_request(payload: dict[str, Any]) -> BulkDeleteEntityTagsRequest:
    """Decode a raw payload into a BulkDeleteEntityTagsRequest.

    Raises:
        InvalidRequestError: If the payload does not match the request shape
    """
    try:
        model = BulkDeleteEntityTagsRequestModel.model_validate(payload)
    except ValidationError as e:
        errors = [(".".join(str(part) for part in err["loc"]) or "request", err["msg"]) for err in e.errors()]
        raise InvalidRequestError(errors) from e
    return model.to_dto()


# ──────────────────────────────────────────────────────────────────────
# Response Types
# ──────────────────────────────────────────────────────────────────────


class TaskStatusItem(BaseModel):
    """One progress update."""

    phase: str
    status: str
    timestamp_ms: int

    @classmethod
    def from_dto(cls, entry: TaskStatusEntry) -> Self:
        return cls(phase=entry.phase, status=entry.status, timestamp_ms=entry.timestamp_ms)


class BulkDeleteEntityTagsResponse(BaseModel):
    """Response for a completed bulk delete."""

    task_id: str
    cycles: int
    fetched: int
    deleted: int
    updated: int
    history: list[TaskStatusItem]

    @classmethod
    def from_dto(cls, task_id: str, result: BulkDeleteResult, history: list[TaskStatusEntry]) -> Self:
        return cls(
            task_id=task_id,
            cycles=result.cycles,
            fetched=result.fetched,
            deleted=result.deleted,
            updated=result.updated,
            history=[TaskStatusItem.from_dto(entry) for entry in history],
        )
