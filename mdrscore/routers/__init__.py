"""Routers package - API endpoint routers."""

from .health import router as health_router
from .scores import router as scores_router
from .honors import router as honors_router

__all__ = [
    "health_router",
    "scores_router",
    "honors_router",
]
