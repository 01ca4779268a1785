"""Entity tags operations for the durable store (ArangoDB).

This is the system of record. The search index is rebuilt from it, never
the other way around.

Schema:
    entity_tags document collection:
        { _key: <record id>, id, idPattern, entityRef, tags, tagsMetadata,
          lastModified, lastModifiedBy }

The record id is used verbatim as _key (ids are lower-cased and only contain
characters ArangoDB accepts in keys).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from entitytags.helpers.dto.entity_tags_dto import EntityTags

if TYPE_CHECKING:
    from arango.cursor import Cursor
    from arango.database import StandardDatabase

    from entitytags.persistence.arango_client import ArangoHandle

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "entity_tags"


class EntityTagsOperations:
    """Operations for the entity_tags collection."""

    def __init__(self, db: StandardDatabase | ArangoHandle, collection_name: str = DEFAULT_COLLECTION) -> None:
        self.db = db
        self.collection_name = collection_name

    def ensure_collection(self) -> bool:
        """Create the collection if missing. Returns True if it was created."""
        if self.db.has_collection(self.collection_name):
            return False
        self.db.create_collection(self.collection_name)
        logger.info(f"[entity_tags] Created collection {self.collection_name}")
        return True

    def get(self, record_id: str) -> EntityTags | None:
        """Fetch one record by id. Returns None if not stored."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                "RETURN DOCUMENT(@collection, @key)",
                bind_vars={"collection": self.collection_name, "key": record_id},
            ),
        )
        result = list(cursor)
        if not result or result[0] is None:
            return None
        return EntityTags.from_dict(result[0])

    def save(self, record: EntityTags) -> None:
        """Insert or fully replace one record."""
        self.save_many([record])

    def save_many(self, records: list[EntityTags]) -> None:
        """Insert or fully replace several records in one AQL round-trip.

        Args:
            records: Records to persist; each replaces any stored document with the same id
        """
        if not records:
            return

        docs: list[dict[str, Any]] = [{**record.to_dict(), "_key": record.id} for record in records]
        self.db.aql.execute(
            """
            FOR doc IN @docs
                UPSERT { _key: doc._key }
                INSERT doc
                REPLACE doc
                IN @@collection
            """,
            bind_vars={"docs": docs, "@collection": self.collection_name},
        )

    def delete(self, record_id: str) -> None:
        """Delete one record by id. Deleting a missing record is a no-op."""
        self.db.aql.execute(
            """
            REMOVE { _key: @key } IN @@collection
            OPTIONS { ignoreErrors: true }
            """,
            bind_vars={"key": record_id, "@collection": self.collection_name},
        )
