"""
Entity tags workflows.
"""

from .bulk_delete_entity_tags_wf import bulk_delete_entity_tags_workflow, is_sweep_done

__all__ = ["bulk_delete_entity_tags_workflow", "is_sweep_done"]
