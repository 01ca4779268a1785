"""Elasticsearch client factory for the entity tags search index."""

from __future__ import annotations

import logging
import os

from elasticsearch import Elasticsearch

logger = logging.getLogger(__name__)


def create_elasticsearch_client(url: str | None = None, request_timeout: float = 30.0) -> Elasticsearch:
    """Create an Elasticsearch client.

    Args:
        url: Cluster URL; falls back to $ELASTICSEARCH_URL, then localhost
        request_timeout: Per-request timeout in seconds

    Returns:
        Elasticsearch client (connections are opened lazily)
    """
    resolved = url or os.getenv("ELASTICSEARCH_URL", "http://localhost:9200")
    logger.debug("Creating Elasticsearch client for %s", resolved)
    return Elasticsearch(resolved, request_timeout=request_timeout)
