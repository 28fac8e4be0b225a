"""FastAPI application factory."""

from fastapi import FastAPI

from headercheck import __version__
from headercheck.api.routes import headers_router, templates_router


def create_app() -> FastAPI:
    """Create the API application with all routers mounted under /api."""
    app = FastAPI(
        title="headercheck",
        description="Check and regenerate source file headers against a template",
        version=__version__,
    )
    app.include_router(templates_router, prefix="/api", tags=["Templates"])
    app.include_router(headers_router, prefix="/api", tags=["Headers"])
    return app
