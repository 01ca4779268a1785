"""Tag mutation component - strip requested tags and split a page by what is left."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from entitytags.helpers.dto.bulk_delete_dto import PagePartition

if TYPE_CHECKING:
    from collections.abc import Iterable

    from entitytags.helpers.dto.bulk_delete_dto import BulkDeleteEntityTagsRequest
    from entitytags.helpers.dto.entity_tags_dto import EntityTags

logger = logging.getLogger(__name__)


def remove_requested_tags(record: EntityTags, request: BulkDeleteEntityTagsRequest) -> int:
    """Remove the requested tags from one record, in place.

    Tag names are removed regardless of namespace; a namespace removes every
    tag in it. When both are given, both removals apply. Names the record
    does not carry are ignored.

    Returns:
        Number of tags removed
    """
    removed = 0
    if request.tags is not None:
        for name in request.tags:
            if record.remove_tag(name):
                removed += 1
    if request.namespace is not None:
        for name in [tag.name for tag in record.tags if tag.namespace == request.namespace]:
            if record.remove_tag(name):
                removed += 1
    return removed


def mutate_page(records: Iterable[EntityTags], request: BulkDeleteEntityTagsRequest) -> int:
    """Apply remove_requested_tags to every record. Returns total tags removed."""
    total = sum(remove_requested_tags(record, request) for record in records)
    logger.debug(f"[tag_mutation] Removed {total} tags")
    return total


def partition_records(records: Iterable[EntityTags]) -> PagePartition:
    """Split mutated records into tagless (delete) and still-tagged (update).

    Fetch order is preserved within each side.
    """
    partition = PagePartition()
    for record in records:
        if record.tags:
            partition.to_update.append(record)
        else:
            partition.to_delete.append(record)
    return partition
