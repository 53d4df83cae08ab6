"""API routers for Terraformer."""

from . import catalog, generate

__all__ = ["catalog", "generate"]
