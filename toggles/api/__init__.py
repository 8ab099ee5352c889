"""API package - FastAPI routes and dependencies."""
from .dependencies import get_flag_evaluator
from .routers import cache_router, flags_router, health_router

__all__ = ["cache_router", "flags_router", "get_flag_evaluator", "health_router"]
