"""
FastAPI dependency injection helpers for web endpoints.

ARCHITECTURE:
- Endpoints should ONLY inject services, never Database or raw infrastructure
- The service is built once by the app lifespan and stored on app.state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request

if TYPE_CHECKING:
    from entitytags.services.domain.entity_tags_svc import EntityTagsService


def get_entity_tags_service(request: Request) -> EntityTagsService:
    """Get EntityTagsService instance."""
    service = getattr(request.app.state, "entity_tags_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Entity tags service not available")
    return service  # type: ignore[no-any-return]
