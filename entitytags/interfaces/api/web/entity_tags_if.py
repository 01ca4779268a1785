"""Entity tags endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from entitytags.components.tasks.task_status_comp import Task
from entitytags.helpers.exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    InvalidSelectionError,
    StoreWriteFailedError,
    UpstreamUnavailableError,
)
from entitytags.interfaces.api.types.entity_tags_types import BulkDeleteEntityTagsResponse, decode_bulk_delete_request
from entitytags.interfaces.api.web.dependencies import get_entity_tags_service
from entitytags.services.domain.entity_tags_svc import EntityTagsService

router = APIRouter(prefix="/entity-tags", tags=["Entity Tags"])


# ──────────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────────


@router.post("/bulk-delete")
def bulk_delete_entity_tags(
    payload: dict[str, Any] = Body(...),
    service: EntityTagsService = Depends(get_entity_tags_service),
) -> BulkDeleteEntityTagsResponse:
    """Strip tag names or a namespace from every selected entity tags record."""
    try:
        request = decode_bulk_delete_request(payload)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail={"errors": [list(err) for err in e.errors]}) from e

    task = Task()
    try:
        outcome = service.bulk_delete(request, task=task)
    except (InvalidRequestError, InvalidSelectionError, AccountNotFoundError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except StoreWriteFailedError as e:
        logging.exception("[API] Bulk delete aborted after partial write")
        raise HTTPException(
            status_code=500,
            detail={
                "error": str(e),
                "store": e.store,
                "record_id": e.record_id,
                "history": [entry.status for entry in task.history],
            },
        ) from e

    return BulkDeleteEntityTagsResponse.from_dto(outcome.task.id, outcome.result, outcome.task.history)
