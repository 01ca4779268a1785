"""
Workflows package.
"""

from .entity_tags.bulk_delete_entity_tags_wf import bulk_delete_entity_tags_workflow

__all__ = [
    "bulk_delete_entity_tags_workflow",
]
