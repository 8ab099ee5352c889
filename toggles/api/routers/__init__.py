"""API routers package."""
from .cache import router as cache_router
from .flags import router as flags_router
from .health import router as health_router

__all__ = ["cache_router", "flags_router", "health_router"]
