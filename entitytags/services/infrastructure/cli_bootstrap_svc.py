"""CLI Bootstrap Service - Service Container for CLI Commands and the API.

Architecture:
- This is a SERVICE layer module (interfaces → services)
- Interfaces should NOT import persistence modules directly
- Interfaces SHOULD use these bootstrap functions to get service instances
- Services are instantiated with proper DI (Database, config, accounts)
"""

from __future__ import annotations

import logging

from arango.exceptions import ArangoError
from elasticsearch import ApiError, ConnectionTimeout
from elasticsearch import ConnectionError as ESConnectionError

from entitytags.components.entity_tags.entity_ref_id_comp import AccountRegistry
from entitytags.helpers.exceptions import UpstreamUnavailableError
from entitytags.persistence.db import Database
from entitytags.services.config_svc import ConfigService
from entitytags.services.domain.entity_tags_svc import EntityTagsService

logger = logging.getLogger(__name__)


def get_config_service() -> ConfigService:
    """Get ConfigService instance."""
    return ConfigService()


def get_database(config_service: ConfigService | None = None) -> Database:
    """Get Database instance connected with the configured store settings.

    Args:
        config_service: Config source (a fresh one is created if omitted)

    Returns:
        Database instance (collection and index created if missing)

    Raises:
        UpstreamUnavailableError: If either store cannot be reached or refuses
            the schema check (the clients are closed before raising)
    """
    config_service = config_service or get_config_service()
    store = config_service.make_store_config()
    db = Database.connect(
        arango_hosts=store.arango_hosts,
        arango_username=store.arango_username,
        arango_password=store.arango_password,
        arango_db_name=store.arango_db_name,
        elasticsearch_url=store.elasticsearch_url,
        collection_name=store.entity_tags_collection,
        index_name=store.elasticsearch_index,
    )
    try:
        db.entity_tags.ensure_collection()
    except (OSError, ArangoError) as e:
        db.close()
        logger.error(f"[CLI Bootstrap] Durable store not ready: {e}")
        raise UpstreamUnavailableError("durable_store", e) from e
    try:
        db.entity_tags_index.ensure_index()
    except (ESConnectionError, ConnectionTimeout, ApiError) as e:
        db.close()
        logger.error(f"[CLI Bootstrap] Search index not ready: {e}")
        raise UpstreamUnavailableError("search_index", e) from e
    return db


def get_entity_tags_service(config_service: ConfigService | None = None) -> EntityTagsService:
    """Get EntityTagsService with injected Database and account registry.

    Example:
        >>> service = get_entity_tags_service()
        >>> service.bulk_delete(request)
    """
    config_service = config_service or get_config_service()
    db = get_database(config_service)
    accounts = AccountRegistry.from_config(config_service.get_accounts())
    logger.debug(f"[CLI Bootstrap] Entity tags service ready ({len(accounts)} accounts)")
    return EntityTagsService(db, accounts)
