"""Dual store write component - apply one page's deletes and updates to both stores.

Ordering is fixed and encodes which store is authoritative:

    delete: search index first, then durable store (per record)
    update: durable store first (per record), then one bulk index call

A failure aborts the page: UpstreamUnavailableError when a store cannot be
reached, StoreWriteFailedError when it rejects the write. Whatever was
written before the failure stays written; there is no rollback. A record
deleted from the index but not from the durable store stays out of the
index until it is re-indexed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from arango.exceptions import ArangoError
from elasticsearch import ApiError, ConnectionTimeout
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch.helpers import BulkIndexError

from entitytags.helpers.exceptions import StoreWriteFailedError, UpstreamUnavailableError

if TYPE_CHECKING:
    from entitytags.components.tasks.task_status_comp import TaskStatusSink
    from entitytags.helpers.dto.bulk_delete_dto import PagePartition
    from entitytags.helpers.dto.entity_tags_dto import EntityTags
    from entitytags.persistence.db import Database

logger = logging.getLogger(__name__)

BASE_PHASE = "ENTITY_TAGS"

# Store unreachable (python-arango surfaces requests connection errors, which are OSError)
_DURABLE_UNREACHABLE = (OSError,)
_INDEX_UNREACHABLE = (ESConnectionError, ConnectionTimeout)
# Store reached but the write was rejected
_DURABLE_ERRORS = (ArangoError,)
_INDEX_ERRORS = (ApiError, BulkIndexError)


def delete_records(db: Database, records: list[EntityTags], task: TaskStatusSink) -> int:
    """Delete tagless records from the search index, then the durable store.

    Returns:
        Number of records deleted

    Raises:
        UpstreamUnavailableError: If either store cannot be reached
        StoreWriteFailedError: On the first rejected delete
    """
    if not records:
        return 0

    task.update_status(BASE_PHASE, f"Deleting {len(records)} entity tags")
    for record in records:
        logger.info(f"[dual_store_write] Deleting entity tags: {record.id}")
        try:
            db.entity_tags_index.delete(record.id)
        except _INDEX_UNREACHABLE as e:
            raise UpstreamUnavailableError("search_index", e) from e
        except _INDEX_ERRORS as e:
            raise StoreWriteFailedError("search_index", record.id, e) from e
        try:
            db.entity_tags.delete(record.id)
        except _DURABLE_UNREACHABLE as e:
            logger.error(f"[dual_store_write] {record.id} removed from index but not from durable store")
            raise UpstreamUnavailableError("durable_store", e) from e
        except _DURABLE_ERRORS as e:
            logger.error(f"[dual_store_write] {record.id} removed from index but not from durable store")
            raise StoreWriteFailedError("durable_store", record.id, e) from e
    task.update_status(BASE_PHASE, f"Deleted {len(records)} entity tags")
    return len(records)


def update_records(db: Database, records: list[EntityTags], task: TaskStatusSink) -> int:
    """Persist still-tagged records to the durable store, then bulk index them.

    Returns:
        Number of records updated

    Raises:
        UpstreamUnavailableError: If either store cannot be reached
        StoreWriteFailedError: On the first rejected save, or if the bulk index fails
    """
    if not records:
        return 0

    logger.info(f"[dual_store_write] Updating {len(records)} entity tags")
    task.update_status(BASE_PHASE, f"Updating {len(records)} entity tags in durable store")
    for record in records:
        logger.debug(f"[dual_store_write] Saving entity tags: {record.id}")
        try:
            db.entity_tags.save(record)
        except _DURABLE_UNREACHABLE as e:
            raise UpstreamUnavailableError("durable_store", e) from e
        except _DURABLE_ERRORS as e:
            raise StoreWriteFailedError("durable_store", record.id, e) from e

    task.update_status(BASE_PHASE, f"Updating {len(records)} entity tags in search index")
    try:
        db.entity_tags_index.bulk_index(records)
    except _INDEX_UNREACHABLE as e:
        logger.error(f"[dual_store_write] Durable store updated but search index is stale for {len(records)} records")
        raise UpstreamUnavailableError("search_index", e) from e
    except _INDEX_ERRORS as e:
        logger.error(f"[dual_store_write] Durable store updated but search index is stale for {len(records)} records")
        raise StoreWriteFailedError("search_index", None, e) from e
    task.update_status(BASE_PHASE, f"Updated {len(records)} entity tags in search index")
    return len(records)


def write_partition(db: Database, partition: PagePartition, task: TaskStatusSink) -> tuple[int, int]:
    """Apply a page partition: deletes first, then updates.

    Returns:
        (deleted, updated) counts
    """
    deleted = delete_records(db, partition.to_delete, task)
    updated = update_records(db, partition.to_update, task)
    return deleted, updated
