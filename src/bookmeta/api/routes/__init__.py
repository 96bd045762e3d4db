"""API route modules."""

from bookmeta.api.routes.enrich import router as enrich_router
from bookmeta.api.routes.health import router as health_router
from bookmeta.api.routes.resolve import router as resolve_router
from bookmeta.api.routes.search import router as search_router

__all__ = [
    "enrich_router",
    "health_router",
    "resolve_router",
    "search_router",
]
