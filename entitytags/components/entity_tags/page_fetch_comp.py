"""Page fetch component - one bounded, id-ordered query against the search index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from elasticsearch import ApiError, ConnectionTimeout
from elasticsearch import ConnectionError as ESConnectionError

from entitytags.helpers.exceptions import UpstreamUnavailableError

if TYPE_CHECKING:
    from entitytags.helpers.dto.bulk_delete_dto import EntityTagsFilter
    from entitytags.helpers.dto.entity_tags_dto import EntityTags
    from entitytags.persistence.db import Database

logger = logging.getLogger(__name__)

# Page size cap. A page shorter than this means the sweep for the current
# filter is exhausted.
MAX_RESULTS = 10_000


def fetch_page(db: Database, page_filter: EntityTagsFilter | None) -> list[EntityTags]:
    """Fetch one page of records matching a filter, sorted by id ascending.

    Args:
        db: Database instance
        page_filter: Filter for this cycle; None yields an empty page

    Returns:
        At most page_filter.limit records

    Raises:
        UpstreamUnavailableError: If the search index cannot be queried
    """
    if page_filter is None:
        return []

    try:
        records = db.entity_tags_index.query(page_filter)
    except (ApiError, ESConnectionError, ConnectionTimeout) as e:
        logger.exception("[page_fetch] Search index query failed")
        raise UpstreamUnavailableError("search_index", e) from e

    # Stable order regardless of how the index sorted
    records.sort(key=lambda record: record.id)
    logger.debug(f"[page_fetch] Fetched {len(records)} records (limit {page_filter.limit})")
    return records
