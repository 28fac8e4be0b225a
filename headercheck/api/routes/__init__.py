"""API routers."""

from headercheck.api.routes.headers import router as headers_router
from headercheck.api.routes.templates import router as templates_router

__all__ = ["headers_router", "templates_router"]
