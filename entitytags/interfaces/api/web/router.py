"""Combined router for all entity tags endpoints."""

from fastapi import APIRouter

from entitytags.interfaces.api.web import entity_tags_if

router = APIRouter(prefix="/api")

router.include_router(entity_tags_if.router)
