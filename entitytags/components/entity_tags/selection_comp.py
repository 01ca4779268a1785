"""Selection component - turn a bulk delete request into search index filters.

Four mutually exclusive selection modes:

    ByIds                 explicit record ids             one fetch
    ByRefs                explicit resource references    one fetch (refs -> ids)
    ByTypeAndNamespace    entity type + namespace         one sweep
    ByTypeAndTagRotation  entity type + tags[i]           one sweep per tag name

The request is folded into exactly one variant up front; from then on only
the fields that mode needs are visible to the rest of the operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from entitytags.helpers.dto.bulk_delete_dto import (
    BulkDeleteEntityTagsRequest,
    ByIds,
    ByRefs,
    ByTypeAndNamespace,
    ByTypeAndTagRotation,
    EntityTagsFilter,
    Selection,
)
from entitytags.helpers.dto.entity_tags_dto import EntityRef
from entitytags.helpers.exceptions import InvalidSelectionError

logger = logging.getLogger(__name__)


def resolve_selection(request: BulkDeleteEntityTagsRequest) -> Selection:
    """Fold a validated request into its selection variant.

    Raises:
        InvalidSelectionError: If the request does not populate exactly one
            selection mode. Validated requests never do; this is a contract
            violation by the caller.
    """
    populated = [
        name
        for name, present in (
            ("ids", bool(request.ids)),
            ("entity_refs", bool(request.entity_refs)),
            ("entity_type", request.entity_type is not None),
        )
        if present
    ]
    if len(populated) != 1:
        msg = f"Expected exactly one selection mode, got {populated or 'none'}"
        raise InvalidSelectionError(msg)

    if request.ids:
        return ByIds(ids=tuple(request.ids))
    if request.entity_refs:
        return ByRefs(entity_refs=tuple(request.entity_refs))

    entity_type = request.entity_type
    assert entity_type is not None
    if request.namespace is not None:
        return ByTypeAndNamespace(entity_type=entity_type, namespace=request.namespace)
    if request.tags:
        return ByTypeAndTagRotation(entity_type=entity_type, tag_names=tuple(request.tags))

    msg = f"Scan of '{entity_type}' needs a namespace or at least one tag name"
    raise InvalidSelectionError(msg)


def build_page_filter(
    selection: Selection,
    tag_index: int,
    derive_id: Callable[[EntityRef], str],
    limit: int,
) -> EntityTagsFilter | None:
    """Build the search index filter for the current cycle.

    Args:
        selection: Resolved selection variant
        tag_index: Position in the tag name rotation (ByTypeAndTagRotation only)
        derive_id: Maps a resource reference to its record id
        limit: Page size cap

    Returns:
        Filter for this fetch, or None when the selection matches nothing
        (the fetch then returns an empty page without querying)
    """
    if isinstance(selection, ByIds):
        if not selection.ids:
            return None
        return EntityTagsFilter(limit=limit, ids=selection.ids)

    if isinstance(selection, ByRefs):
        ids = tuple(derive_id(ref) for ref in selection.entity_refs)
        if not ids:
            return None
        logger.debug(f"[selection] Resolved {len(ids)} entity refs to record ids")
        return EntityTagsFilter(limit=limit, ids=ids)

    if isinstance(selection, ByTypeAndNamespace):
        return EntityTagsFilter(limit=limit, entity_type=selection.entity_type, namespace=selection.namespace)

    if isinstance(selection, ByTypeAndTagRotation):
        if tag_index >= len(selection.tag_names):
            return None
        return EntityTagsFilter(
            limit=limit,
            entity_type=selection.entity_type,
            tag_name=selection.tag_names[tag_index],
        )

    msg = f"Unknown selection variant: {type(selection).__name__}"
    raise InvalidSelectionError(msg)
