"""Pydantic request and response models for the HTTP API."""

from entitytags.interfaces.api.types.entity_tags_types import (
    BulkDeleteEntityTagsRequestModel,
    BulkDeleteEntityTagsResponse,
    EntityRefModel,
    TaskStatusItem,
    decode_bulk_delete_request,
)

__all__ = [
    "BulkDeleteEntityTagsRequestModel",
    "BulkDeleteEntityTagsResponse",
    "EntityRefModel",
    "TaskStatusItem",
    "decode_bulk_delete_request",
]
