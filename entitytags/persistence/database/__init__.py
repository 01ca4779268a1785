"""
Store operation classes - one per backing store.
"""

from .entity_tags_aql import EntityTagsOperations
from .entity_tags_es import EntityTagsIndexOperations

__all__ = ["EntityTagsIndexOperations", "EntityTagsOperations"]
