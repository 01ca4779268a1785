"""
Application database.

Composes the two stores a bulk entity tag operation touches:
- entity_tags: durable store (ArangoDB), the system of record
- entity_tags_index: search index (Elasticsearch), used for query/filter access
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from entitytags.persistence.arango_client import create_arango_client
from entitytags.persistence.database.entity_tags_aql import DEFAULT_COLLECTION, EntityTagsOperations
from entitytags.persistence.database.entity_tags_es import DEFAULT_INDEX, EntityTagsIndexOperations
from entitytags.persistence.elasticsearch_client import create_elasticsearch_client

if TYPE_CHECKING:
    from elasticsearch import Elasticsearch

    from entitytags.persistence.arango_client import ArangoHandle

__all__ = ["Database"]

logger = logging.getLogger(__name__)


class Database:
    """
    Handles for both entity tag stores.

    Constructed from already-open clients so callers (and tests) decide how
    connections are made. Use Database.connect() to build from settings.
    """

    def __init__(
        self,
        arango_db: ArangoHandle,
        es_client: Elasticsearch,
        collection_name: str = DEFAULT_COLLECTION,
        index_name: str = DEFAULT_INDEX,
    ) -> None:
        self.arango_db = arango_db
        self.es_client = es_client
        self.entity_tags = EntityTagsOperations(arango_db, collection_name)
        self.entity_tags_index = EntityTagsIndexOperations(es_client, index_name)

    @classmethod
    def connect(
        cls,
        arango_hosts: str,
        arango_username: str,
        arango_password: str,
        arango_db_name: str,
        elasticsearch_url: str,
        collection_name: str = DEFAULT_COLLECTION,
        index_name: str = DEFAULT_INDEX,
    ) -> Database:
        """Open both clients and wrap them."""
        arango_db = create_arango_client(
            hosts=arango_hosts,
            username=arango_username,
            password=arango_password,
            db_name=arango_db_name,
        )
        es_client = create_elasticsearch_client(elasticsearch_url)
        logger.info(f"[Database] Connected: arango={arango_hosts}/{arango_db_name} es={elasticsearch_url}")
        return cls(arango_db, es_client, collection_name=collection_name, index_name=index_name)

    def close(self) -> None:
        """Release the Elasticsearch connection pool (python-arango needs no explicit close)."""
        self.es_client.close()
