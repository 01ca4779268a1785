"""HTTP endpoints for the entity tags API."""

from entitytags.interfaces.api.web.router import router

__all__ = ["router"]
