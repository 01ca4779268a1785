"""
Entity tags package.
"""

from .dual_store_write_comp import BASE_PHASE, delete_records, update_records, write_partition
from .entity_ref_id_comp import (
    AccountCredentials,
    AccountRegistry,
    EntityRefId,
    build_entity_ref_id,
    complete_entity_ref,
    derive_entity_ref_id,
)
from .page_fetch_comp import MAX_RESULTS, fetch_page
from .request_validation_comp import collect_validation_errors, validate_bulk_delete_request
from .selection_comp import build_page_filter, resolve_selection
from .tag_mutation_comp import mutate_page, partition_records, remove_requested_tags

__all__ = [
    "BASE_PHASE",
    "MAX_RESULTS",
    "AccountCredentials",
    "AccountRegistry",
    "EntityRefId",
    "build_entity_ref_id",
    "build_page_filter",
    "collect_validation_errors",
    "complete_entity_ref",
    "delete_records",
    "derive_entity_ref_id",
    "fetch_page",
    "mutate_page",
    "partition_records",
    "remove_requested_tags",
    "resolve_selection",
    "update_records",
    "validate_bulk_delete_request",
    "write_partition",
]
