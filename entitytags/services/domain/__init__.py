"""
Domain services.
"""

from .entity_tags_svc import BulkDeleteOutcome, EntityTagsService

__all__ = ["BulkDeleteOutcome", "EntityTagsService"]
