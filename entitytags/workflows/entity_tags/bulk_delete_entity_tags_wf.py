"""Bulk delete entity tags workflow - scan, strip, write, repeat.

Each cycle:
    1. Build the filter for the current selection step
    2. Fetch one page (at most MAX_RESULTS records, id ascending)
    3. Strip the requested tag names / namespace from every record
    4. Delete records left without tags, rewrite the rest (both stores)
    5. Decide whether another cycle is needed

Termination:
    - ids / entity refs: always one cycle
    - entity type + namespace: stop on the first page shorter than MAX_RESULTS
    - entity type + tag names: a short page advances to the next tag name;
      stop once every tag name's sweep is done. A full page re-fetches the
      same tag name, which drains it page by page (the records just written
      no longer match).

Strictly sequential. The caller must not run two bulk deletes over
overlapping selections at the same time.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from entitytags.components.entity_tags.dual_store_write_comp import BASE_PHASE, write_partition
from entitytags.components.entity_tags.entity_ref_id_comp import AccountRegistry, derive_entity_ref_id
from entitytags.components.entity_tags.page_fetch_comp import MAX_RESULTS, fetch_page
from entitytags.components.entity_tags.selection_comp import build_page_filter, resolve_selection
from entitytags.components.entity_tags.tag_mutation_comp import mutate_page, partition_records
from entitytags.helpers.dto.bulk_delete_dto import BulkDeleteResult
from entitytags.helpers.logging_helper import reset_log_context, set_log_context

if TYPE_CHECKING:
    from entitytags.components.tasks.task_status_comp import TaskStatusSink
    from entitytags.helpers.dto.bulk_delete_dto import BulkDeleteEntityTagsRequest
    from entitytags.helpers.dto.entity_tags_dto import EntityRef
    from entitytags.persistence.db import Database

logger = logging.getLogger(__name__)


def is_sweep_done(
    request: BulkDeleteEntityTagsRequest,
    page_size: int,
    tag_index: int,
    max_results: int = MAX_RESULTS,
) -> tuple[bool, int]:
    """Evaluate termination after a cycle.

    Args:
        request: The request being executed
        page_size: Number of records the cycle fetched
        tag_index: Current position in the tag name rotation
        max_results: Page size cap

    Returns:
        (done, next_tag_index)
    """
    if request.entity_type is None:
        return True, tag_index

    if page_size < max_results:
        tag_index += 1

    if request.namespace is not None:
        # Single filter: the sweep ending ends the operation. The index
        # advance above does not matter here.
        return page_size < max_results, tag_index

    return tag_index == len(request.tags or ()), tag_index


def bulk_delete_entity_tags_workflow(
    db: Database,
    request: BulkDeleteEntityTagsRequest,
    task: TaskStatusSink,
    accounts: AccountRegistry | None = None,
    max_results: int = MAX_RESULTS,
) -> BulkDeleteResult:
    """Strip tag names or a namespace from every selected entity tags record.

    Args:
        db: Database instance (durable store + search index)
        request: Validated request (exactly one selection mode)
        task: Progress sink; receives a message after each phase
        accounts: Account registry for resolving entity refs to record ids
        max_results: Page size cap (tests lower it; production uses MAX_RESULTS)

    Returns:
        BulkDeleteResult with cycle and record counts

    Raises:
        InvalidSelectionError: If the request does not select exactly one mode
        UpstreamUnavailableError: If the search index cannot be queried
        StoreWriteFailedError: If any write fails (earlier writes are kept)
        AccountNotFoundError: If an entity ref names an unknown account
    """
    registry = accounts if accounts is not None else AccountRegistry()
    selection = resolve_selection(request)

    def derive_id(entity_ref: EntityRef) -> str:
        return derive_entity_ref_id(entity_ref, registry).id

    result = BulkDeleteResult()
    done = False
    tag_index = 0

    context_token = set_log_context(operation_id=uuid.uuid4().hex[:8])
    logger.info(f"[bulk_delete] Starting ({type(selection).__name__})")
    try:
        while not done:
            page_filter = build_page_filter(selection, tag_index, derive_id, max_results)
            records = fetch_page(db, page_filter)
            task.update_status(BASE_PHASE, "Retrieving current entity tags")

            mutate_page(records, request)
            partition = partition_records(records)
            deleted, updated = write_partition(db, partition, task)

            result.cycles += 1
            result.fetched += len(records)
            result.deleted += deleted
            result.updated += updated

            done, tag_index = is_sweep_done(request, len(records), tag_index, max_results)
            logger.info(
                f"[bulk_delete] Cycle {result.cycles}: fetched={len(records)} deleted={deleted} "
                f"updated={updated} tag_index={tag_index} done={done}"
            )
    finally:
        reset_log_context(context_token)

    logger.info(
        f"[bulk_delete] Finished after {result.cycles} cycles: "
        f"deleted={result.deleted} updated={result.updated}"
    )
    return result
