"""Entity tags operations for the search index (Elasticsearch).

The index is a queryable copy of the durable store. Every document uses the
record id as its Elasticsearch _id.

Mapping:
    id                      keyword (sortable, stable scan order)
    entityRef.*             keyword
    tags                    nested { name: keyword, namespace: keyword, value: not indexed }
    tagsMetadata            not indexed

Writes use refresh="wait_for" so that a query issued right after a write
sees it. Bulk deletes re-query the same filter until it is drained, which
depends on this.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from elasticsearch import NotFoundError
from elasticsearch.helpers import bulk

from entitytags.helpers.dto.entity_tags_dto import EntityTags

if TYPE_CHECKING:
    from elasticsearch import Elasticsearch

    from entitytags.helpers.dto.bulk_delete_dto import EntityTagsFilter

logger = logging.getLogger(__name__)

DEFAULT_INDEX = "entity_tags"

INDEX_MAPPINGS: dict[str, Any] = {
    "properties": {
        "id": {"type": "keyword"},
        "idPattern": {"type": "keyword", "index": False},
        "entityRef": {
            "properties": {
                "entityType": {"type": "keyword"},
                "entityId": {"type": "keyword"},
                "cloudProvider": {"type": "keyword"},
                "application": {"type": "keyword"},
                "account": {"type": "keyword"},
                "accountId": {"type": "keyword"},
                "region": {"type": "keyword"},
                "attributes": {"type": "object", "enabled": False},
            }
        },
        "tags": {
            "type": "nested",
            "properties": {
                "name": {"type": "keyword"},
                "namespace": {"type": "keyword"},
                "value": {"type": "object", "enabled": False},
                "valueType": {"type": "keyword"},
                "category": {"type": "keyword"},
            },
        },
        "tagsMetadata": {"type": "object", "enabled": False},
        "lastModified": {"type": "long"},
        "lastModifiedBy": {"type": "keyword"},
    }
}


def build_query(page_filter: EntityTagsFilter) -> dict[str, Any]:
    """Translate an EntityTagsFilter into an Elasticsearch bool query."""
    must: list[dict[str, Any]] = []
    if page_filter.entity_type is not None:
        must.append({"term": {"entityRef.entityType": page_filter.entity_type}})
    if page_filter.ids is not None:
        must.append({"terms": {"id": list(page_filter.ids)}})
    if page_filter.namespace is not None:
        must.append({"nested": {"path": "tags", "query": {"term": {"tags.namespace": page_filter.namespace}}}})
    if page_filter.tag_name is not None:
        # Any value: existence of the named tag is enough
        must.append({"nested": {"path": "tags", "query": {"term": {"tags.name": page_filter.tag_name}}}})
    if not must:
        return {"match_all": {}}
    return {"bool": {"filter": must}}


class EntityTagsIndexOperations:
    """Operations for the entity_tags search index."""

    def __init__(self, client: Elasticsearch, index_name: str = DEFAULT_INDEX) -> None:
        self.client = client
        self.index_name = index_name

    def ensure_index(self) -> bool:
        """Create the index with its mapping if missing. Returns True if created."""
        if self.client.indices.exists(index=self.index_name):
            return False
        self.client.indices.create(index=self.index_name, mappings=INDEX_MAPPINGS)
        logger.info(f"[entity_tags_index] Created index {self.index_name}")
        return True

    def query(self, page_filter: EntityTagsFilter) -> list[EntityTags]:
        """Return up to page_filter.limit records matching the filter, sorted by id ascending."""
        response = self.client.search(
            index=self.index_name,
            query=build_query(page_filter),
            size=page_filter.limit,
            sort=[{"id": {"order": "asc"}}],
        )
        hits = response["hits"]["hits"]
        return [EntityTags.from_dict(hit["_source"]) for hit in hits]

    def bulk_index(self, records: list[EntityTags]) -> int:
        """Index (create or replace) every record in one bulk request.

        Returns:
            Number of documents indexed

        Raises:
            BulkIndexError: If any document failed to index
        """
        if not records:
            return 0
        actions = [
            {"_op_type": "index", "_index": self.index_name, "_id": record.id, "_source": record.to_dict()}
            for record in records
        ]
        success, _errors = bulk(self.client, actions, refresh="wait_for")
        return int(success)

    def delete(self, record_id: str) -> bool:
        """Delete one document. Returns False if it was not indexed."""
        try:
            self.client.delete(index=self.index_name, id=record_id, refresh="wait_for")
        except NotFoundError:
            logger.debug(f"[entity_tags_index] {record_id} not indexed, nothing to delete")
            return False
        return True
