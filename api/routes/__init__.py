"""API route modules."""

from .health_routes import router as health_router
from .pages_routes import router as pages_router
from .users_routes import router as users_router

__all__ = [
    "health_router",
    "pages_router",
    "users_router",
]
