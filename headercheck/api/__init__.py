"""HTTP API for header checking."""

from headercheck.api.app import create_app

__all__ = ["create_app"]
