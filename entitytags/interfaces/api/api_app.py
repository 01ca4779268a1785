"""
FastAPI application setup and configuration.
Main entry point for the entity tags API service.

Architecture:
- All routes live under /api
- The lifespan builds the EntityTagsService once and closes its stores on shutdown
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from entitytags.__version__ import __version__
from entitytags.interfaces.api import web


# ----------------------------------------------------------------------
#  App lifecycle
# ----------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """
    FastAPI lifespan context manager.

    Builds the service from configuration unless one was already installed
    on app.state (tests do this).
    """
    from entitytags.services.infrastructure.cli_bootstrap_svc import get_entity_tags_service

    owned = getattr(app_instance.state, "entity_tags_service", None) is None
    if owned:
        app_instance.state.entity_tags_service = get_entity_tags_service()
    logging.info("[API] FastAPI starting")

    try:
        yield
    finally:
        logging.info("[API] FastAPI shutting down...")
        if owned:
            app_instance.state.entity_tags_service.db.close()
            app_instance.state.entity_tags_service = None
        logging.info("[API] Shutdown complete")


# ----------------------------------------------------------------------
#  FastAPI app
# ----------------------------------------------------------------------
api_app = FastAPI(title="Entity Tags", version=__version__, lifespan=lifespan)


# Global exception handler
@api_app.exception_handler(Exception)
async def exception_handler(request, exc: Exception):
    logging.exception(f"[API] Exception: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


api_app.include_router(web.router)
