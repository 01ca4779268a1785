"""Entity tags service - validated entry point for bulk tag maintenance.

Interfaces hand this service an already-decoded request. The service:
1. Validates it (selection exclusivity, something to remove)
2. Runs the bulk delete workflow with an explicit task for progress
3. Marks the task completed or failed, then returns or re-raises
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from entitytags.components.entity_tags.dual_store_write_comp import BASE_PHASE
from entitytags.components.entity_tags.entity_ref_id_comp import AccountRegistry
from entitytags.components.entity_tags.request_validation_comp import validate_bulk_delete_request
from entitytags.components.tasks.task_status_comp import Task
from entitytags.workflows.entity_tags.bulk_delete_entity_tags_wf import bulk_delete_entity_tags_workflow

if TYPE_CHECKING:
    from entitytags.helpers.dto.bulk_delete_dto import BulkDeleteEntityTagsRequest, BulkDeleteResult
    from entitytags.persistence.db import Database

logger = logging.getLogger(__name__)


@dataclass
class BulkDeleteOutcome:
    """Result of a bulk delete plus the task that tracked it."""

    result: BulkDeleteResult
    task: Task


class EntityTagsService:
    """Service for bulk entity tag operations."""

    def __init__(self, db: Database, accounts: AccountRegistry | None = None) -> None:
        """Initialize entity tags service.

        Args:
            db: Database instance (durable store + search index)
            accounts: Account registry for entity ref resolution
        """
        self.db = db
        self.accounts = accounts if accounts is not None else AccountRegistry()

    def bulk_delete(self, request: BulkDeleteEntityTagsRequest, task: Task | None = None) -> BulkDeleteOutcome:
        """Strip tag names or a namespace from every selected record.

        Args:
            request: Decoded request
            task: Task to report into (a fresh one is created if omitted)

        Returns:
            BulkDeleteOutcome with counts and the completed task

        Raises:
            InvalidRequestError: If validation fails (nothing is touched)
            UpstreamUnavailableError, StoreWriteFailedError, AccountNotFoundError:
                From the workflow; the task is marked failed first
        """
        validate_bulk_delete_request(request)

        task = task or Task()
        task.update_status(BASE_PHASE, "Initializing bulk delete of entity tags")
        try:
            result = bulk_delete_entity_tags_workflow(self.db, request, task, accounts=self.accounts)
        except Exception as e:
            task.fail(BASE_PHASE, f"Bulk delete failed: {e}")
            logger.exception("[EntityTagsService] Bulk delete failed")
            raise

        task.complete(BASE_PHASE, f"Deleted {result.deleted} and updated {result.updated} entity tags")
        return BulkDeleteOutcome(result=result, task=task)
