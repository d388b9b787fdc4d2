"""API routes package."""

from .grouping_routes import router as grouping_router

__all__ = ["grouping_router"]
