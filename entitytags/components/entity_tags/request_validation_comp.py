"""Request validation component - reject malformed bulk delete requests before any I/O."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from entitytags.helpers.exceptions import InvalidRequestError

if TYPE_CHECKING:
    from entitytags.helpers.dto.bulk_delete_dto import BulkDeleteEntityTagsRequest

logger = logging.getLogger(__name__)

SELECTION_FIELD = "entityTags.selection"
SELECTION_MESSAGE = "Exactly one of 'ids', 'entityRefs', or 'entityType' can be specified in a bulk delete operation"
TARGET_FIELD = "tags"
TARGET_MESSAGE = "At least one tag or namespace must be provided"


def collect_validation_errors(request: BulkDeleteEntityTagsRequest) -> list[tuple[str, str]]:
    """Return every (field, message) problem with the request; empty if valid."""
    errors: list[tuple[str, str]] = []

    selections = sum(
        (
            1 if request.ids else 0,
            1 if request.entity_refs else 0,
            1 if request.entity_type is not None else 0,
        )
    )
    if selections != 1:
        errors.append((SELECTION_FIELD, SELECTION_MESSAGE))

    if request.namespace is None and not request.tags:
        errors.append((TARGET_FIELD, TARGET_MESSAGE))

    return errors


def validate_bulk_delete_request(request: BulkDeleteEntityTagsRequest) -> None:
    """Validate selection exclusivity and that something is being removed.

    Raises:
        InvalidRequestError: With every problem found
    """
    errors = collect_validation_errors(request)
    if errors:
        logger.warning(f"[request_validation] Rejected bulk delete request: {errors}")
        raise InvalidRequestError(errors)
